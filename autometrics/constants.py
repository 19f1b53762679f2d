"""Metric names, descriptions and label keys shared across the package."""

# Metrics
COUNTER_NAME = "function.calls"
HISTOGRAM_NAME = "function.calls.duration"
GAUGE_NAME = "function.calls.concurrent"
BUILD_INFO_NAME = "build_info"

# Prometheus-flavoured metric names
COUNTER_NAME_PROMETHEUS = "function_calls_total"
HISTOGRAM_NAME_PROMETHEUS = "function_calls_duration_seconds"
GAUGE_NAME_PROMETHEUS = "function_calls_concurrent"

# Descriptions
COUNTER_DESCRIPTION = "Autometrics counter for tracking function calls"
HISTOGRAM_DESCRIPTION = "Autometrics histogram for tracking function call duration"
GAUGE_DESCRIPTION = "Autometrics gauge for tracking concurrent function calls"
BUILD_INFO_DESCRIPTION = (
    "Autometrics info metric for tracking software version and build details"
)

# Labels
FUNCTION_KEY = "function"
MODULE_KEY = "module"
CALLER_FUNCTION_KEY = "caller.function"
CALLER_FUNCTION_PROMETHEUS = "caller_function"
CALLER_MODULE_KEY = "caller.module"
CALLER_MODULE_PROMETHEUS = "caller_module"
RESULT_KEY = "result"
OK_KEY = "ok"
ERROR_KEY = "error"
OBJECTIVE_NAME = "objective.name"
OBJECTIVE_NAME_PROMETHEUS = "objective_name"
OBJECTIVE_PERCENTILE = "objective.percentile"
OBJECTIVE_PERCENTILE_PROMETHEUS = "objective_percentile"
OBJECTIVE_LATENCY_THRESHOLD = "objective.latency.threshold"
OBJECTIVE_LATENCY_THRESHOLD_PROMETHEUS = "objective_latency_threshold"
VERSION_KEY = "version"
COMMIT_KEY = "commit"
BRANCH_KEY = "branch"
SERVICE_NAME_KEY = "service.name"
SERVICE_NAME_KEY_PROMETHEUS = "service_name"