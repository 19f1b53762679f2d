import re
from urllib.parse import unquote

import pytest

from autometrics.docs import (
    ADD_BUILD_INFO_LABELS,
    DEFAULT_PROMETHEUS_URL,
    concurrent_calls_query,
    create_metrics_docs,
    error_ratio_query,
    latency_query,
    make_prometheus_url,
    prometheus_url_from_env,
    qualified_name,
    request_rate_query,
)


def _expr(url: str) -> str:
    match = re.search(r"g0\.expr=([^&]*)&g0\.tab=0$", url)
    assert match is not None
    return match.group(1)


def test_qualified_name_plain_function():
    assert qualified_name("handler", None) == "handler"


def test_qualified_name_method():
    assert qualified_name("new", "MyStruct") == "MyStruct::new"


def test_prometheus_url_default():
    assert prometheus_url_from_env({}) == DEFAULT_PROMETHEUS_URL
    assert DEFAULT_PROMETHEUS_URL == "http://localhost:9090"


def test_prometheus_url_from_environment():
    env = {"PROMETHEUS_URL": "http://prometheus.example.com"}
    assert prometheus_url_from_env(env) == "http://prometheus.example.com"


def test_make_prometheus_url_pinned():
    url = make_prometheus_url("http://localhost:9090", "up", "c")
    assert url == "http://localhost:9090/graph?g0.expr=%23%20c%0A%0Aup&g0.tab=0"


@pytest.mark.parametrize("base", ["http://localhost:9090", "http://localhost:9090/"])
def test_make_prometheus_url_single_slash(base):
    url = make_prometheus_url(base, "up", "comment")
    assert url.startswith("http://localhost:9090/graph?g0.expr=")
    assert "//graph" not in url


@pytest.mark.parametrize(
    "query,comment",
    [
        ('rate(x{a="b"}[5m])', "Some comment"),
        ("sum(a) / sum(b)", "über ünïcode"),
        ("a_b-c.d~e", "under_score"),
    ],
)
def test_make_prometheus_url_round_trip(query, comment):
    url = make_prometheus_url("http://localhost:9090", query, comment)
    expr = _expr(url)
    assert re.fullmatch(r"(?:[A-Za-z0-9]|%[0-9A-F]{2})*", expr)
    assert unquote(expr) == f"# {comment}\n\n{query}"


def test_request_rate_query_contents():
    query = request_rate_query("function", "handler")
    assert 'function="handler"' in query
    assert "function_calls(_count)?(_total)?" in query
    assert query.endswith(f"{ADD_BUILD_INFO_LABELS})")
    assert query.count("(") == query.count(")")


def test_error_ratio_query_divides_by_request_rate():
    query = error_ratio_query("caller_function", "handler")
    request_rate = request_rate_query("caller_function", "handler")
    assert query.endswith(f"\n/\n({request_rate})")
    assert 'caller_function="handler",result="error"' in query
    assert query.count("(") == query.count(")")


def test_latency_query_percentiles():
    query = latency_query("function", "handler")
    assert "histogram_quantile(0.99, " in query
    assert "histogram_quantile(0.95, " in query
    assert "\nor\n" in query
    assert "function_calls_duration(_seconds)?_bucket" in query
    assert query.count("(") == query.count(")")


def test_concurrent_calls_query():
    query = concurrent_calls_query("function", "handler")
    assert 'function_calls_concurrent{function="handler"}' in query
    assert ADD_BUILD_INFO_LABELS in query


def test_create_metrics_docs_without_concurrency():
    docs = create_metrics_docs("http://localhost:9090", "handler", False)
    assert docs.startswith("\n\n---\n\n## Autometrics\n")
    assert "View the live metrics for the `handler` function:" in docs
    assert "Concurrent Calls" not in docs
    assert docs.count("- [Request Rate](") == 2
    assert docs.count("- [Error Ratio](") == 2
    assert "*functions called by* `handler`" in docs


def test_create_metrics_docs_with_concurrency():
    docs = create_metrics_docs("http://localhost:9090", "handler", True)
    assert "- [Concurrent Calls](" in docs
    expected = make_prometheus_url(
        "http://localhost:9090",
        concurrent_calls_query("function", "handler"),
        "Concurrent calls to the `handler` function",
    )
    assert expected in docs


def test_create_metrics_docs_links_decode_to_queries():
    docs = create_metrics_docs("http://localhost:9090", "handler", False)
    links = re.findall(r"\]\((http[^)\s]*)\)", docs)
    assert len(links) == 5
    decoded = [unquote(_expr(link)) for link in links]
    assert decoded[0].endswith(request_rate_query("function", "handler"))
    assert decoded[1].endswith(error_ratio_query("function", "handler"))
    assert decoded[2].endswith(latency_query("function", "handler"))
    assert decoded[3].endswith(request_rate_query("caller_function", "handler"))
    assert decoded[4].endswith(error_ratio_query("caller_function", "handler"))
    assert all(text.startswith("# ") for text in decoded)