"""Query grammar parsing.

Pure functions with no external dependencies.
Extracts inline ``key:value`` directives from a raw query and turns the valid
ones into engine filter clauses.
"""

import re
from typing import ClassVar

from parish_search.domain.search import (
    Directive,
    FilterClause,
    ParsedQuery,
    normalize_content_type,
    normalize_document_type,
    year_in_range,
)


def escape_filter_value(value: str) -> str:
    """Backslash-escape characters that would terminate a quoted filter string."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("'", "\\'")


class QueryGrammarParser:
    """Priority-ordered directive scanner.

    Each directive kind is located on the raw text in priority order (type,
    year, doctype, before, after, in). A kind takes its first occurrence that
    does not overlap a span already claimed by a higher-priority kind, so
    ``in:type:file`` resolves to a type directive. Repeats stay in the free
    text untouched. Invalid values are stripped but yield no clause.
    """

    # Priority order doubles as the fixed clause order of compiled filters
    PATTERNS: ClassVar[dict[Directive, re.Pattern[str]]] = {
        Directive.TYPE: re.compile(r"\btype:(\w+)", re.IGNORECASE),
        Directive.YEAR: re.compile(r"\byear:(\d{4})", re.IGNORECASE),
        Directive.DOCTYPE: re.compile(r"\bdoctype:(\w+)", re.IGNORECASE),
        Directive.BEFORE: re.compile(r"\bbefore:(\d{4})(?:-(\d{2}))?", re.IGNORECASE),
        Directive.AFTER: re.compile(r"\bafter:(\d{4})(?:-(\d{2}))?", re.IGNORECASE),
        Directive.IN: re.compile(r"\bin:(\w+)", re.IGNORECASE),
    }

    ORDER: ClassVar[tuple[Directive, ...]] = tuple(PATTERNS)

    def parse(self, raw: str) -> ParsedQuery:
        """Split a raw query into cleaned free text and filter clauses.

        Args:
            raw: The query exactly as typed by the user

        Returns:
            ParsedQuery with whitespace-normalised text and ordered clauses
        """
        raw = raw or ""
        matches = self._first_matches(raw)

        found = {directive: self._to_clause(directive, match) for directive, match in matches}
        text = self._remove_spans(raw, sorted(match.span() for _, match in matches))
        clauses = [found[directive] for directive in self.ORDER if found.get(directive) is not None]
        return ParsedQuery(text=text, clauses=clauses)

    def find_directive_spans(self, raw: str) -> list[str]:
        """Return the directive substrings that ``parse`` would strip, in text order."""
        matches = sorted((match for _, match in self._first_matches(raw or "")), key=lambda match: match.start())
        return [match.group(0) for match in matches]

    def _first_matches(self, raw: str) -> list[tuple[Directive, re.Match[str]]]:
        claimed: list[tuple[int, int]] = []
        matches: list[tuple[Directive, re.Match[str]]] = []
        for directive, pattern in self.PATTERNS.items():
            for match in pattern.finditer(raw):
                start, end = match.span()
                if any(start < taken_end and taken_start < end for taken_start, taken_end in claimed):
                    continue
                claimed.append((start, end))
                matches.append((directive, match))
                break
        return matches

    def _to_clause(self, directive: Directive, match: re.Match[str]) -> FilterClause | None:
        if directive is Directive.TYPE:
            content_type = normalize_content_type(match.group(1))
            if content_type is None:
                return None
            return FilterClause(directive=directive, expression=f'type = "{content_type}"')

        if directive is Directive.DOCTYPE:
            doctype = normalize_document_type(match.group(1))
            if doctype is None:
                return None
            return FilterClause(directive=directive, expression=f'document_type = "{doctype}"')

        if directive is Directive.IN:
            folder = escape_filter_value(match.group(1).lower())
            return FilterClause(directive=directive, expression=f'path CONTAINS "{folder}"')

        if directive is Directive.YEAR:
            year = int(match.group(1))
            if not year_in_range(year):
                return None
            return FilterClause(directive=directive, expression=f"year = {year}")

        return self._date_clause(directive, match.group(1), match.group(2))

    def _date_clause(self, directive: Directive, year_text: str, month_text: str | None) -> FilterClause | None:
        year = int(year_text)
        if directive is Directive.BEFORE:
            month = int(month_text) if month_text else 12
            # Day is pinned to 31 regardless of month length
            day, operator = 31, "<"
        else:
            month = int(month_text) if month_text else 1
            day, operator = 1, ">"

        if not year_in_range(year) or not 1 <= month <= 12:
            return None

        sortable = year * 10000 + month * 100 + day
        return FilterClause(directive=directive, expression=f"date_sortable {operator} {sortable}")

    @staticmethod
    def _remove_spans(raw: str, spans: list[tuple[int, int]]) -> str:
        pieces: list[str] = []
        cursor = 0
        for start, end in spans:
            pieces.append(raw[cursor:start])
            cursor = end
        pieces.append(raw[cursor:])
        return re.sub(r"\s+", " ", "".join(pieces)).strip()


def parse_query(raw: str) -> ParsedQuery:
    """Parse ``raw`` with a fresh stateless parser."""
    return QueryGrammarParser().parse(raw)
