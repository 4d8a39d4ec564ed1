import sys

from git_author_stats.author_stats import main

sys.exit(main())
