# greedysched/config.py

import os

# Wall-clock seconds between two ticks; one simulated time unit lasts one tick
TICK_SECONDS = float(os.getenv("GREEDYSCHED_TICK_SECONDS", "1.0"))
LOG_LEVEL = os.getenv("GREEDYSCHED_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Accepted range for both worker and task counts
MIN_COUNT = 4
MAX_COUNT = 20

# Inclusive range for generated task durations
MIN_TASK_DURATION = 4
MAX_TASK_DURATION = 20

API_HOST = os.getenv("GREEDYSCHED_HOST", "127.0.0.1")
API_PORT = int(os.getenv("GREEDYSCHED_PORT", "8000"))
