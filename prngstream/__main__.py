import sys

from prngstream.generate_stream import main

sys.exit(main())
