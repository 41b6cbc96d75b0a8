"""Application layer - the parse and marshal pipelines and their ports.

Contents:
    * :mod:`.ports` - Protocols the adapters satisfy
    * :mod:`.merging` - Layered merge of defaults, file and environment
    * :mod:`.parsing` - Defaults, merge and decode wired into ``parse``
    * :mod:`.marshalling` - Typed value to YAML, JSON or ENV text
"""

from __future__ import annotations
