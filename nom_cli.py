#!/usr/bin/env python3
"""
NOM Tools CLI

Thin shell over nom_tools.cli: parses arguments, runs an indicator over
bar data and prints the results. No indicator logic lives here.

  python nom_cli.py list
  python nom_cli.py run --indicator vwap_bands --csv bars.csv
"""

import sys

from nom_tools.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
