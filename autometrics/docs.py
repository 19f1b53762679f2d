"""Prometheus queries and documentation links for instrumented functions."""

from __future__ import annotations

import os
from typing import Mapping, Optional

__all__ = [
    "ADD_BUILD_INFO_LABELS",
    "DEFAULT_PROMETHEUS_URL",
    "qualified_name",
    "prometheus_url_from_env",
    "make_prometheus_url",
    "request_rate_query",
    "error_ratio_query",
    "latency_query",
    "concurrent_calls_query",
    "create_metrics_docs",
]

ADD_BUILD_INFO_LABELS = (
    "* on (instance, job) group_left(version, commit) last_over_time(build_info[1s])"
)

DEFAULT_PROMETHEUS_URL = "http://localhost:9090"

_ALPHANUMERIC = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
)


def _percent_encode(text: str) -> str:
    """Percent-encode every byte of the UTF-8 text that is not ASCII alphanumeric."""
    return "".join(
        chr(byte) if byte in _ALPHANUMERIC else f"%{byte:02X}"
        for byte in text.encode("utf-8")
    )


def qualified_name(function: str, struct_name: Optional[str] = None) -> str:
    """Return the label value for a function, ``Struct::method`` for methods."""
    if struct_name is not None:
        return f"{struct_name}::{function}"
    return function


def prometheus_url_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return ``PROMETHEUS_URL`` from the environment, or the default URL."""
    env = os.environ if environ is None else environ
    return env.get("PROMETHEUS_URL", DEFAULT_PROMETHEUS_URL)


def make_prometheus_url(url: str, query: str, comment: str) -> str:
    """Build a link to the Prometheus graph tab showing ``query`` with a comment."""
    encoded = _percent_encode(f"# {comment}\n\n{query}")
    if not url.endswith("/"):
        url += "/"
    return f"{url}graph?g0.expr={encoded}&g0.tab=0"


def request_rate_query(label_key: str, label_value: str) -> str:
    """Query for the per-second call rate, averaged over 5 minutes."""
    return (
        "sum by (function, module, service_name, commit, version) "
        f'(rate({{__name__=~"function_calls(_count)?(_total)?",{label_key}="{label_value}"}}[5m]) '
        f"{ADD_BUILD_INFO_LABELS})"
    )


def error_ratio_query(label_key: str, label_value: str) -> str:
    """Query for the fraction of calls that returned errors."""
    request_rate = request_rate_query(label_key, label_value)
    return (
        "(sum by (function, module, service_name, commit, version) "
        f'(rate({{__name__=~"function_calls(_count)?(_total)?",{label_key}="{label_value}",result="error"}}[5m]) '
        f"{ADD_BUILD_INFO_LABELS}))\n/\n({request_rate})"
    )


def latency_query(label_key: str, label_value: str) -> str:
    """Query for the 95th and 99th percentile latencies."""
    latency = (
        "sum by (le, function, module, service_name, commit, version) "
        f'(rate({{__name__=~"function_calls_duration(_seconds)?_bucket",{label_key}="{label_value}"}}[5m]) '
        f"{ADD_BUILD_INFO_LABELS})"
    )
    return (
        f'label_replace(histogram_quantile(0.99, {latency}), "percentile_latency", "99", "", "")\n'
        "or\n"
        f'label_replace(histogram_quantile(0.95, {latency}), "percentile_latency", "95", "", "")'
    )


def concurrent_calls_query(label_key: str, label_value: str) -> str:
    """Query for the number of concurrent calls."""
    return (
        "sum by (function, module, service_name, commit, version) "
        f'(function_calls_concurrent{{{label_key}="{label_value}"}} {ADD_BUILD_INFO_LABELS})'
    )


def create_metrics_docs(
    prometheus_url: str, function: str, track_concurrency: bool = False
) -> str:
    """Return a Markdown section linking to the live metrics of ``function``."""
    request_rate_url = make_prometheus_url(
        prometheus_url,
        request_rate_query("function", function),
        f"Rate of calls to the `{function}` function per second, "
        "averaged over 5 minute windows",
    )
    callee_request_rate_url = make_prometheus_url(
        prometheus_url,
        request_rate_query("caller_function", function),
        f"Rate of calls to functions called by `{function}` per second, "
        "averaged over 5 minute windows",
    )
    error_ratio_url = make_prometheus_url(
        prometheus_url,
        error_ratio_query("function", function),
        f"Percentage of calls to the `{function}` function that return errors, "
        "averaged over 5 minute windows",
    )
    callee_error_ratio_url = make_prometheus_url(
        prometheus_url,
        error_ratio_query("caller_function", function),
        f"Percentage of calls to functions called by `{function}` that return errors, "
        "averaged over 5 minute windows",
    )
    latency_url = make_prometheus_url(
        prometheus_url,
        latency_query("function", function),
        f"95th and 99th percentile latencies (in seconds) for the `{function}` function",
    )

    concurrent_calls_doc = ""
    if track_concurrency:
        concurrent_calls_url = make_prometheus_url(
            prometheus_url,
            concurrent_calls_query("function", function),
            f"Concurrent calls to the `{function}` function",
        )
        concurrent_calls_doc = f"\n- [Concurrent Calls]({concurrent_calls_url}"

    return (
        "\n\n---\n"
        "\n"
        "## Autometrics\n"
        "\n"
        f"View the live metrics for the `{function}` function:\n"
        f"- [Request Rate]({request_rate_url})\n"
        f"- [Error Ratio]({error_ratio_url})\n"
        f"- [Latency (95th and 99th percentiles)]({latency_url}){concurrent_calls_doc}\n"
        "\n"
        f"Or, dig into the metrics of *functions called by* `{function}`:\n"
        f"- [Request Rate]({callee_request_rate_url})\n"
        f"- [Error Ratio]({callee_error_ratio_url})\n"
    )