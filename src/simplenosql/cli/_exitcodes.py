"""Process exit codes shared by CLI commands."""

SUCCESS = 0
EXECUTION_FAILURE = 1
USAGE_ERROR = 2
DATABASE_ERROR = 3
