import sys

from voltai.cli import main

sys.exit(main())
