import sys

from usb2snes_cli.cli import main

sys.exit(main())
