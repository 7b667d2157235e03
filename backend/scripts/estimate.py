"""Calculate or recalculate a project estimate from the command line.

  python scripts/estimate.py calculate -p PROJECT_ID -f table
  python scripts/estimate.py recalculate -p PROJECT_ID
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from estimator.cli import main


if __name__ == "__main__":
    sys.exit(main())
