from pathlib import Path
import sys

import matplotlib

matplotlib.use("Agg")

# Ensure the project root is on the Python path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
