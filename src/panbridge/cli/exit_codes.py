"""Process exit codes used by the panbridge CLI."""

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_ENGINE_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_INPUT_ERROR = 4
