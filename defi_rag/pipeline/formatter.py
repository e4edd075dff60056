"""Render fetched market data as the plain-text context for the answer prompt."""
from __future__ import annotations

from defi_rag.core.config.models import ContextLimits
from defi_rag.core.contracts.market import FetchedDataSet
from defi_rag.core.contracts.query import QueryDescriptor

NO_DATA = "No specific DeFi data found for the query."


def format_amount(value: float | None) -> str:
    """Thousands separators, at most three decimals; N/A when missing."""
    if value is None:
        return "N/A"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_context(
    descriptor: QueryDescriptor,
    data: FetchedDataSet,
    limits: ContextLimits | None = None,
) -> str:
    limits = limits or ContextLimits()
    lines: list[str] = []

    for protocol, record in data.protocols_data.items():
        if record is None:
            continue
        lines.append(f"Protocol: {protocol}")
        lines.append(f"TVL: ${format_amount(record.tvl)}")
        lines.append(f"Chain: {record.chain or 'Multiple'}")
        lines.append("")

    if data.yields_data:
        lines.append("Yields Information:")
        for y in data.yields_data[: limits.yields]:
            lines.append(f"- Pool: {y.pool}")
            lines.append(f"  APY: {y.apy:.2f}%")
            lines.append(f"  Chain: {y.chain or 'N/A'}")
            lines.append("")

    if data.top_protocols:
        lines.append("Top Protocols by TVL:")
        for rank, p in enumerate(data.top_protocols[: limits.top_protocols], 1):
            lines.append(f"{rank}. {p.name or 'Unknown'}: ${format_amount(p.tvl)}")
        lines.append("")

    if not lines:
        return NO_DATA
    return "\n".join(lines) + "\n"
