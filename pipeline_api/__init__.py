"""Jobs API service: FastAPI app factory plus the jobs route plugin."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pipeline-jobs-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
