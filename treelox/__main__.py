import sys

from .lox import main

sys.exit(main())
