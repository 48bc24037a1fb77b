"""
Core Package.

Contains the injection engine:
- Lexical Scanner and Statement Recognizer
- Binding Registry and Usage Resolver
- Injector (merge, synthesis, placement)
- Metadata Tracker and the per-caller Context
"""
