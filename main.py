# main.py
#
# Prunes the fetched asset tree down to one target profile.
# Run this AFTER fetching all toolchains/firmwares and BEFORE packaging.
#
#   python main.py                      # esp32 profile, current directory
#   python main.py --profile rp2040 --root /path/to/project

import sys

from asset_pruner.cli import main

if __name__ == "__main__":
    sys.exit(main())
