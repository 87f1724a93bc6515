import sys

from score_paginator.cli import main

sys.exit(main())
