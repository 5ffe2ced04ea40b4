"""
Assistant page context.

A snapshot of what the user currently sees on a page (filters, headline
numbers, visible table rows), sent along with chat messages so the assistant
can answer questions about the page.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class _ContextModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssistantTableRow(_ContextModel):
    id: Optional[str] = None
    values: dict[str, Union[str, int, float]]
    note: Optional[str] = None


class AssistantTable(_ContextModel):
    columns: list[str] = Field(default_factory=list)
    visible_count: Optional[int] = Field(None, ge=0)
    rows: Optional[list[AssistantTableRow]] = Field(None, max_length=100)


class AssistantPageContext(_ContextModel):
    """Page snapshot shared with the chat assistant"""
    page_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    summary: Optional[str] = None
    path: Optional[str] = None
    timestamp: Optional[str] = None
    filters: Optional[dict[str, Union[str, list[str]]]] = None
    stats: Optional[dict[str, Union[str, int, float]]] = None
    table: Optional[AssistantTable] = None
    highlights: Optional[list[str]] = None
    meta: Optional[dict[str, Any]] = None


def parse_assistant_page_context(data: Any) -> Optional[AssistantPageContext]:
    """Validate an untrusted page context; invalid input yields ``None``."""
    if not data:
        return None
    if isinstance(data, AssistantPageContext):
        return data
    try:
        return AssistantPageContext.model_validate(data)
    except ValidationError:
        return None


def summarize_assistant_page_context(
    context: Optional[AssistantPageContext],
) -> Optional[str]:
    """Render a page context as plain text for the system prompt."""
    if context is None:
        return None

    lines: list[str] = []
    title_line = f"{context.title} ({context.path})" if context.path else context.title
    lines.append(f"Page: {title_line}")

    if context.description:
        lines.append(context.description)

    if context.summary:
        lines.append(context.summary)

    if context.timestamp:
        lines.append(f"Snapshot taken at {context.timestamp}")

    if context.filters:
        filter_entries = "; ".join(
            f"{key}: {', '.join(value) if isinstance(value, list) else value}"
            for key, value in context.filters.items()
        )
        lines.append(f"Active filters: {filter_entries}")

    if context.stats:
        stat_entries = "; ".join(f"{key}: {value}" for key, value in context.stats.items())
        lines.append(f"Key metrics: {stat_entries}")

    if context.table:
        table = context.table
        if table.columns:
            lines.append(f"Visible table columns: {', '.join(table.columns)}")

        if table.rows:
            sample_rows = []
            for index, row in enumerate(table.rows[:5]):
                values = ", ".join(f"{key}={value}" for key, value in row.values.items())
                prefix = row.id or f"Row {index + 1}"
                sample_rows.append(f"{prefix}: {values}")
            visible = table.visible_count if table.visible_count is not None else len(table.rows)
            lines.append(
                f"Sample rows (showing {len(sample_rows)} of {visible} visible):\n"
                + "\n".join(sample_rows)
            )

    if context.highlights:
        lines.append(f"Highlights: {' | '.join(context.highlights)}")

    return "\n".join(lines)
