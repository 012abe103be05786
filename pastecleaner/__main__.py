import sys

from pastecleaner.cli import main

sys.exit(main())
