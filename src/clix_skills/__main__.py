# Allow running as `python -m clix_skills`
import sys

from clix_skills.cli import main

sys.exit(main())
