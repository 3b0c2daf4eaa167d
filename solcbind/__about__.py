"""
WARNING: Do not modify this file.
"""

__all__ = [
    "__title__", "__summary__", "__version__", "__author__", "__email__", "__license__", "__copyright__", "__url__"
]

__title__ = "solcbind"

__url__ = "https://github.com/solcbind/solcbind"

__summary__ = "Typed Standard JSON bindings for the Solidity compiler."

__version__ = "0.4.0"

__author__ = "solcbind"

__email__ = "dev@solcbind.org"

__license__ = "GNU Affero General Public License, Version 3"

__copyright__ = 'Copyright (C) 2024 solcbind'
