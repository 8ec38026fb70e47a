import sys

from iconmosaic.cli import main

sys.exit(main())
