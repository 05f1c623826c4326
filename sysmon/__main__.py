import sys

from sysmon.system_monitor import main

sys.exit(main())
