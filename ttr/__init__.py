"""ttr: terminal task runner.

Discovers `.ttr.yaml` files, merges them into one menu tree and runs the
selected task in the foreground.
"""

__version__ = "0.4.0"
