import sys

from cineVault.cli import main

sys.exit(main())
