import sys

from engine_export.pipeline.orchestrator import main

if __name__ == "__main__":
    sys.exit(main())
