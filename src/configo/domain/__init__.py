"""Domain layer - schema description, defaults, merge and key rules.

Pure functions and value types with no I/O and no third-party imports.

Contents:
    * :mod:`.schema` - Field descriptor tables for target shapes
    * :mod:`.defaults` - Default extraction and literal coercion
    * :mod:`.merge` - Recursive hierarchical map merge
    * :mod:`.keys` - Dotted path and environment name translation
    * :mod:`.options` - The ``Option`` value object
    * :mod:`.enums` - Output formats and field kinds
    * :mod:`.errors` - Typed error hierarchy
"""

from __future__ import annotations
