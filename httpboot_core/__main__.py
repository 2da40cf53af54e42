# -*- coding: utf-8 -*-
#
# httpboot-core : configuration validation for the HTTP/TFTP boot server
# License : BSD-3-Clause


"""
httpboot-core
~~~~~~~~~~~~~

configuration validation for the HTTP/TFTP boot server
"""

# stdlib imports
import os
import platform
import sys

# app imports
from httpboot_core.cli.validate_config import main


def init() -> None:
    """Handle main init"""
    # hard set no support for non linux platforms
    if "linux" not in sys.platform:
        sys.exit(
            "{0} only works on Linux... exiting...".format(os.path.basename(__file__))
        )

    # hard set no support for python < v3.9
    if sys.version_info < (3, 9):
        sys.exit(
            "{0} requires Python version 3.9 or higher...\nyou are trying to run with Python version {1}...\nexiting...".format(
                os.path.basename(__file__), platform.python_version()
            )
        )

    if __name__ == "__main__":
        sys.exit(main())


init()
