import sys

from osm_qa.cli import main

sys.exit(main())
