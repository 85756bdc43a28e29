"""Filter compilation.

Merges grammar clauses with UI selections and the enabled content types into a
single engine filter expression. Grammar always wins over the UI for the same
directive kind.
"""

from collections.abc import Sequence

from parish_search.domain.search import (
    ContentTypeConfig,
    Directive,
    FilterClause,
    SearchOptions,
    normalize_content_type,
    normalize_document_type,
    year_in_range,
)


class FilterCompiler:
    """Pure, stateless compiler from clauses and options to a filter string."""

    def compile_clauses(
        self,
        clauses: Sequence[FilterClause],
        options: SearchOptions,
        config: ContentTypeConfig,
    ) -> list[FilterClause]:
        """Return the ordered clause list that makes up the final filter.

        Precedence:
            1. a grammar ``type`` clause suppresses every other type constraint
            2. otherwise the UI type filter, when it names a known type
            3. otherwise a disjunction over the enabled content types
            then grammar clauses verbatim, then UI doctype and year when the
            grammar did not already supply them
        """
        grammar = {clause.directive for clause in clauses}
        compiled: list[FilterClause] = []

        if Directive.TYPE not in grammar:
            type_clause = self._type_clause(options, config)
            if type_clause is not None:
                compiled.append(type_clause)

        compiled.extend(clauses)

        if Directive.DOCTYPE not in grammar and options.doctype:
            doctype = normalize_document_type(options.doctype)
            if doctype is not None:
                compiled.append(FilterClause(directive=Directive.DOCTYPE, expression=f'document_type = "{doctype}"'))

        if Directive.YEAR not in grammar and options.year is not None and year_in_range(options.year):
            compiled.append(FilterClause(directive=Directive.YEAR, expression=f"year = {options.year}"))

        return compiled

    def compile(
        self,
        clauses: Sequence[FilterClause],
        options: SearchOptions,
        config: ContentTypeConfig,
    ) -> str:
        """Join compiled clauses with AND; an empty string means unconstrained."""
        return " AND ".join(clause.expression for clause in self.compile_clauses(clauses, options, config))

    @staticmethod
    def _type_clause(options: SearchOptions, config: ContentTypeConfig) -> FilterClause | None:
        if options.type_filter:
            content_type = normalize_content_type(options.type_filter)
            if content_type is not None:
                return FilterClause(directive=Directive.TYPE, expression=f'type = "{content_type}"')

        enabled = config.enabled_types()
        if not enabled:
            return None
        disjunction = " OR ".join(f'type = "{content_type}"' for content_type in enabled)
        return FilterClause(directive=Directive.TYPE, expression=f"({disjunction})")


def compile_filter(
    clauses: Sequence[FilterClause],
    options: SearchOptions,
    config: ContentTypeConfig,
) -> str:
    return FilterCompiler().compile(clauses, options, config)
