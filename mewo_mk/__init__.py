"""mewo-mk: run a project's make.py under the project's virtual environment."""

__version__ = "0.3.0"
