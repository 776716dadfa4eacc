# mummy/logging/tags.py
"""
Logging subsystem tags.

Prefixed to log messages so output stays searchable by subsystem.
"""

PLAN = "[PLAN]"
MUMMIFY = "[MUMMIFY]"
DESCRIPTION = "[DESCRIPTION]"
IMAGE = "[IMAGE]"
PAGE = "[PAGE]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
