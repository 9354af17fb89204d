import sys

from archive_zero.cli import main

sys.exit(main())
