import sys

from focusfirewall.cli import main

sys.exit(main())
