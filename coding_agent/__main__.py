import sys

from coding_agent.main import main


sys.exit(main())
