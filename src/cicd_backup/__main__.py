import sys

from cicd_backup.cli import main

sys.exit(main())
