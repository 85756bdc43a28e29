"""Unit tests for filter compilation and precedence rules."""

from itertools import product

import pytest

from parish_search.domain.search import ContentTypeConfig, Directive, SearchOptions
from parish_search.services.filter_compiler import FilterCompiler, compile_filter
from parish_search.services.query_parser import parse_query


ALL_TYPES = '(type = "file" OR type = "post" OR type = "page" OR type = "faq" OR type = "event")'
NOTHING_ENABLED = ContentTypeConfig(files=False, posts=False, pages=False, faqs=False, events=False)


class TestTypePrecedence:
    def test_enabled_content_types_form_a_disjunction(self):
        assert compile_filter([], SearchOptions(), ContentTypeConfig()) == ALL_TYPES

    def test_disabled_content_types_are_left_out(self):
        config = ContentTypeConfig(posts=False, events=False)

        assert compile_filter([], SearchOptions(), config) == '(type = "file" OR type = "page" OR type = "faq")'

    def test_no_enabled_types_means_no_constraint(self):
        assert compile_filter([], SearchOptions(), NOTHING_ENABLED) == ""

    def test_ui_type_replaces_defaults(self):
        assert compile_filter([], SearchOptions(type_filter="post"), ContentTypeConfig()) == 'type = "post"'

    def test_ui_type_alias_is_resolved(self):
        assert compile_filter([], SearchOptions(type_filter="document"), ContentTypeConfig()) == 'type = "file"'

    def test_unknown_ui_type_falls_back_to_defaults(self):
        options = SearchOptions(type_filter='file" OR year > 0')

        assert compile_filter([], options, ContentTypeConfig()) == ALL_TYPES

    @pytest.mark.parametrize("flags", list(product([True, False], repeat=5)))
    def test_grammar_type_beats_ui_type_for_every_config(self, flags):
        config = ContentTypeConfig(**dict(zip(("files", "posts", "pages", "faqs", "events"), flags, strict=True)))
        parsed = parse_query("type:file minutes")

        result = compile_filter(parsed.clauses, SearchOptions(type_filter="post"), config)

        assert result == 'type = "file"'


class TestGrammarMerging:
    def test_grammar_clauses_follow_type_constraint(self):
        parsed = parse_query("year:2024 in:council roof")

        result = compile_filter(parsed.clauses, SearchOptions(), NOTHING_ENABLED)

        assert result == 'year = 2024 AND path CONTAINS "council"'

    def test_ui_doctype_added_when_grammar_has_none(self):
        result = compile_filter([], SearchOptions(doctype="Minutes"), NOTHING_ENABLED)

        assert result == 'document_type = "minutes"'

    def test_grammar_doctype_beats_ui_doctype(self):
        parsed = parse_query("doctype:agenda")

        result = compile_filter(parsed.clauses, SearchOptions(doctype="policy"), NOTHING_ENABLED)

        assert result == 'document_type = "agenda"'

    def test_invalid_ui_doctype_is_skipped(self):
        assert compile_filter([], SearchOptions(doctype="memo"), NOTHING_ENABLED) == ""

    def test_ui_year_added_when_valid(self):
        assert compile_filter([], SearchOptions(year="2022"), NOTHING_ENABLED) == "year = 2022"

    @pytest.mark.parametrize("year", [1989, 2101, "20x4", "", None])
    def test_invalid_ui_year_is_skipped(self, year):
        assert compile_filter([], SearchOptions(year=year), NOTHING_ENABLED) == ""

    def test_grammar_year_beats_ui_year(self):
        parsed = parse_query("year:2020")

        result = compile_filter(parsed.clauses, SearchOptions(year=2021), NOTHING_ENABLED)

        assert result == "year = 2020"

    def test_invalid_grammar_year_lets_ui_year_through(self):
        parsed = parse_query("year:1800")

        assert compile_filter(parsed.clauses, SearchOptions(year=2021), NOTHING_ENABLED) == "year = 2021"

    def test_full_ordering(self):
        parsed = parse_query("before:2024-03 in:finance accounts")
        options = SearchOptions(type_filter="file", doctype="finance", year=2023)

        result = compile_filter(parsed.clauses, options, ContentTypeConfig())

        assert result == (
            'type = "file" AND date_sortable < 20240331 AND path CONTAINS "finance" '
            'AND document_type = "finance" AND year = 2023'
        )


class TestCompileClauses:
    def test_clause_list_is_tagged_per_directive(self):
        parsed = parse_query("year:2024")

        clauses = FilterCompiler().compile_clauses(parsed.clauses, SearchOptions(doctype="agenda"), ContentTypeConfig())

        assert [clause.directive for clause in clauses] == [Directive.TYPE, Directive.YEAR, Directive.DOCTYPE]

    def test_compilation_is_idempotent(self):
        parsed = parse_query("type:faq year:2024 doctype:other hall")
        options = SearchOptions(type_filter="page", doctype="agenda", year=2020)
        config = ContentTypeConfig(pages=False)
        compiler = FilterCompiler()

        first = compiler.compile(parsed.clauses, options, config)
        second = compiler.compile(parsed.clauses, options, config)

        assert first == second
