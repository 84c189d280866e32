"""Adapters that implement the segmentation capabilities with real NLP libraries.

WHY: The core only depends on the small protocols in core.capabilities.
Concrete implementations pull in heavy optional libraries, so they live
here and are imported only when a caller asks for them.

RULES:
- Each adapter lives in its own module and imports its library at module level.
- Importing this package never imports an optional library.
"""
