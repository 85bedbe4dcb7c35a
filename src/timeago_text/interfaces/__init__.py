"""External interfaces - command line entry point"""

from .cli import main as cli_main

__all__ = ["cli_main"]
