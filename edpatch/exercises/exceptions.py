from pathlib import Path


class InvalidConfigError(Exception):
    def __init__(self, config_path: Path, error: Exception):
        super().__init__(f"Invalid workspace config {config_path}: {error}")
        self.config_path = config_path
        self.error = error


class ExerciseNotFoundError(Exception):
    pass


class PatchNotFoundError(Exception):
    pass
