import sys
from gifcrop.output import main

sys.exit(main())
