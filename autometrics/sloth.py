"""Generate Sloth SLO definitions for the autometrics objectives."""

from __future__ import annotations

import math
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Union

__all__ = [
    "DEFAULT_OBJECTIVES",
    "format_rate",
    "generate_success_rate_slo",
    "generate_latency_slo",
    "generate_sloth_file",
    "write_sloth_file",
]

DEFAULT_OBJECTIVES = ("90", "95", "99", "99.9")

_HEADER = "version: prometheus/v1\nservice: autometrics\nslos:\n"


def format_rate(value: float) -> str:
    """Format a float as its shortest round-tripping decimal, without exponent."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def generate_success_rate_slo(
    objective_percentile: str, min_calls_per_second: float
) -> str:
    """Return the Sloth SLO entry for the success rate of one objective percentile."""
    p = objective_percentile
    name = p.replace(".", "_")
    rate = format_rate(min_calls_per_second)
    return f'''  - name: success-rate-{name}
    objective: {p}
    description: Common SLO based on function success rates
    sli:
      events:
        error_query: sum by (objective_name, objective_percentile, service_name) (rate({{__name__=~"function_calls(_count)?(_total)?",objective_percentile="{p}",result="error"}}[{{{{.window}}}}]))
        total_query: sum by (objective_name, objective_percentile, service_name) (rate({{__name__=~"function_calls(_count)?(_total)?",objective_percentile="{p}"}}[{{{{.window}}}}])) >= {rate}
    alerting:
      name: High Error Rate SLO - {p}%
      labels:
        category: success-rate
      annotations:
        summary: "High error rate on the `{{{{$labels.objective_name}}}}` SLO for the `{{{{$labels.service_name}}}}` service"
      page_alert:
        labels:
          severity: page
      ticket_alert:
        labels:
          severity: ticket
'''


def generate_latency_slo(objective_percentile: str, min_calls_per_second: float) -> str:
    """Return the Sloth SLO entry for the latency of one objective percentile."""
    p = objective_percentile
    name = p.replace(".", "_")
    rate = format_rate(min_calls_per_second)
    return f'''  - name: latency-{name}
    objective: {p}
    description: Common SLO based on function latency
    sli:
      events:
        error_query: >
          sum by (objective_name, objective_percentile, service_name) (rate({{__name__=~"function_calls_duration(_seconds)?_count", objective_percentile="{p}"}}[{{{{.window}}}}]))
          -
          (sum by (objective_name, objective_percentile, service_name) (
            label_join(rate({{__name__=~"function_calls_duration(_seconds)?_bucket", objective_percentile="{p}"}}[{{{{.window}}}}]), "autometrics_check_label_equality", "", "objective_latency_threshold")
            and
            label_join(rate({{__name__=~"function_calls_duration(_seconds)?_bucket", objective_percentile="{p}"}}[{{{{.window}}}}]), "autometrics_check_label_equality", "", "le")
          ))
        total_query: sum by (objective_name, objective_percentile, service_name) (rate({{__name__=~"function_calls_duration(_seconds)?_count", objective_percentile="{p}"}}[{{{{.window}}}}])) >= {rate}
    alerting:
      name: High Latency SLO - {p}%
      labels:
        category: latency
      annotations:
        summary: "High latency on the `{{{{$labels.objective_name}}}}` SLO for the `{{{{$labels.service_name}}}}` service"
      page_alert:
        labels:
          severity: page
      ticket_alert:
        labels:
          severity: ticket
'''


def generate_sloth_file(objectives: Iterable[str], min_calls_per_second: float) -> str:
    """Return a Sloth file: all success-rate SLOs first, then all latency SLOs."""
    objectives = [str(objective) for objective in objectives]
    success = "".join(
        generate_success_rate_slo(objective, min_calls_per_second)
        for objective in objectives
    )
    latency = "".join(
        generate_latency_slo(objective, min_calls_per_second)
        for objective in objectives
    )
    return _HEADER + success + latency


def write_sloth_file(
    objectives: Iterable[str] = DEFAULT_OBJECTIVES,
    alerting_traffic_threshold: float = 1.0,
    output: Optional[Union[str, Path]] = None,
) -> str:
    """Generate the Sloth file and write it to ``output``, or print it if none.

    ``alerting_traffic_threshold`` is in events per minute.
    """
    text = generate_sloth_file(objectives, alerting_traffic_threshold / 60.0)
    if output is None:
        print(text)
    else:
        Path(output).write_text(text, encoding="utf-8")
    return text