import sys

from command_ai.launcher import main

if __name__ == "__main__":
    sys.exit(main())
