import sys

from autofd.cli import main

sys.exit(main())
