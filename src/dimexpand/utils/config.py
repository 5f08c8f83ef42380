"""
Configuration constants to replace magic numbers throughout dimexpand
"""

import os
import tempfile

# Indexed-name convention: base ++ separator ++ binder
INDEX_SEPARATOR = "_"

# Generated code indexes arrays 1-based; the Python backend shifts by this
INDEX_BASE = 1

# Parser configuration (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.environ.get(
    "DIMEXPAND_PARSER_CACHE",
    os.path.join(tempfile.gettempdir(), "dimexpand_template_parser.cache"),
)
DEFAULT_TEMPLATE_FILE = "<template>"

# Python backend
DEFAULT_FUNCTION_NAME = "generated"
INDENT = "    "
