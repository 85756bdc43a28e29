"""Pure, stateless search services: parse, compile, build, project."""

from .filter_compiler import FilterCompiler, compile_filter
from .query_parser import QueryGrammarParser, parse_query
from .request_builder import SearchRequestBuilder, build_request
from .result_projector import ResultProjector, project


__all__ = [
    "FilterCompiler",
    "QueryGrammarParser",
    "ResultProjector",
    "SearchRequestBuilder",
    "build_request",
    "compile_filter",
    "parse_query",
    "project",
]
