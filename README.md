# autometrics

Tooling around a small, standard set of function-level metrics (call
counts, call durations, concurrent calls and build information): the metric
names and label keys, Prometheus queries and graph links for a function,
overrides for the `result` label of enum values, exemplar labels taken from
the current span, and generation of Service-Level Objective files for Sloth.

## Installation

```
pip install .
```

Install with the `test` extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `autometrics.constants` – metric names (`COUNTER_NAME`, `HISTOGRAM_NAME`,
  `GAUGE_NAME`, `BUILD_INFO_NAME` and their Prometheus-flavoured forms),
  descriptions and label keys such as `FUNCTION_KEY`, `RESULT_KEY`, `OK_KEY`,
  `ERROR_KEY` and `OBJECTIVE_PERCENTILE`.
- `autometrics.docs` – Prometheus queries and graph links for a function.
- `autometrics.result_labels` – the `result_labels` decorator and
  `get_result_label`.
- `autometrics.exemplars` – `ExemplarExtractor`, `get_exemplar` and
  `span_context_labels`.
- `autometrics.sloth` – generation of Sloth SLO definition files.
- `autometrics.cli` – the `autometrics` command.

## Prometheus queries and links

```python
from autometrics.docs import create_metrics_docs, prometheus_url_from_env

print(create_metrics_docs(prometheus_url_from_env(), "create_user", True))
```

`create_metrics_docs(prometheus_url, function, track_concurrency=False)`
returns a Markdown section with links to graphs of the function's request
rate, error ratio and 95th/99th percentile latency, plus the request rate and
error ratio of the functions it calls. With `track_concurrency` it also links
to the concurrent-calls graph.

`prometheus_url_from_env(environ=None)` reads `PROMETHEUS_URL` from the
environment (or the given mapping) and falls back to
`http://localhost:9090`. `qualified_name(function, struct_name=None)` gives
the `Type::method` form used as the function label of methods.

The individual queries are available as `request_rate_query`,
`error_ratio_query`, `latency_query` and `concurrent_calls_query`, each taking
a label key (such as `"function"` or `"caller_function"`) and its value.
`make_prometheus_url(url, query, comment)` builds a link to the Prometheus
graph tab, with the comment and query percent-encoded.

## Overriding the result label

```python
from enum import Enum
from autometrics.result_labels import result_labels, get_result_label

@result_labels(NETWORK="error", AUTHENTICATION="ok")
class ServiceError(Enum):
    DATABASE = 1
    NETWORK = 2
    AUTHENTICATION = 3

get_result_label(ServiceError.AUTHENTICATION)  # "ok"
get_result_label(ServiceError.DATABASE)        # None
```

Only `"ok"` and `"error"` are accepted. Decorating something that is not an
`Enum`, naming a member the enum does not have, or giving any other value
raises `ResultLabelError` (a `ValueError`). `get_result_label` returns `None`
for values that are not enum members or have no declared label.

## Exemplars

```python
from autometrics.exemplars import ExemplarExtractor, get_exemplar

extractor = ExemplarExtractor.from_fields(["trace_id"])
with extractor.span(trace_id="abc123", user="someone"):
    get_exemplar()  # {"trace_id": "abc123"}
get_exemplar()      # None
```

Within a span only the selected fields are kept; non-string values are
stored as their `repr`. A span with none of the selected fields does not
replace the labels of an enclosing one. Spans are tracked with context
variables, so they nest and follow asyncio tasks.

`span_context_labels(trace_id, span_id)` turns integer or hexadecimal
identifiers into `trace_id` (32 hex digits) and `span_id` (16 hex digits)
labels, and returns `None` when either identifier is zero or out of range.
A string that is not hexadecimal raises `ValueError`.

## Generating an SLO file

From Python:

```python
from autometrics.sloth import generate_sloth_file, write_sloth_file

text = generate_sloth_file(["90", "95", "99", "99.9"], 1 / 60)
write_sloth_file(["99", "99.9"], alerting_traffic_threshold=5, output="slo.yaml")
```

`generate_sloth_file(objectives, min_calls_per_second)` lists a success-rate
SLO for every objective, followed by a latency SLO for every objective.
`write_sloth_file` takes the threshold in calls per minute, writes the file
to `output` or prints it when `output` is `None`, and returns the text.

From the command line:

```
autometrics generate-sloth-file
autometrics generate-sloth-file --objectives 99 --objectives 99.9 -a 5 -o slo.yaml
```

- `--objectives` – a percentile to support; repeat it for several. By default
  90, 95, 99 and 99.9. The objectives used in instrumented code must match one
  of them for the alerts to work.
- `-a`, `--alerting-traffic-threshold` – minimum traffic, in calls per
  minute, for an alert to fire (1 by default).
- `-o`, `--output` – where to write the file; printed to standard output if
  omitted. If the file cannot be written the command prints the error and
  exits with status 1.

Feed the resulting file to Sloth to produce Prometheus recording and alerting
rules.

## What this package does not do

It does not instrument functions or record metrics: there is no decorator
that counts calls or times them, no counters, histograms or gauges, and no
exporter that serves or pushes metrics. There are also no objective classes
or label-set types; objectives appear here only as the percentile strings
passed to the SLO generator, and label keys only as the constants in
`autometrics.constants`.