# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "factcheck"

CLAIMS: Final[str] = f"{ROOT}:claims"  # extracted claim lists keyed by text hash
ANALYSES: Final[str] = f"{ROOT}:analyses"  # analysis replies keyed by mode + text hash
