import sys

from tinyinfer.main import main

sys.exit(main())
