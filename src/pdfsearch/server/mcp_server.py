"""FastMCP server implementation for pdfsearch."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from pdfsearch.schemas import SearchRequest
from pdfsearch.service import SearchService, format_outcome


def create_mcp_server(service: SearchService) -> FastMCP:
    """Create an MCP server answering queries from ``service``.

    Design: the service owns the loaded indexes; tools only validate
    arguments and format results.

    Args:
        service: Query service holding the indexes to search

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="pdfsearch",
    )

    @mcp.tool()
    def search_pdf(
        query: str,
        limit: int = 5,
        source: Optional[str] = None,
        before: int = 1,
        after: int = 2,
        budget: int = 1200,
        phraseBoost: float = 2.0,
        phraseOnly: bool = False,
    ) -> str:
        """Search the local PDF index and return relevant snippets.

        Args:
            query: Words or phrase to look for
            limit: Maximum number of results (1-20, default: 5)
            source: Document name or PDF path selecting the index (default: last built)
            before: Chunks of context shown before each match (default: 1)
            after: Chunks of context shown after each match (default: 2)
            budget: Preview length cap in characters (200-5000, default: 1200)
            phraseBoost: Score added when the whole query appears verbatim (default: 2)
            phraseOnly: Only return passages containing the whole query verbatim

        Returns:
            One line per match with page, score and a highlighted preview
        """
        request = SearchRequest(
            query=query,
            limit=limit,
            source=source,
            before=before,
            after=after,
            budget=budget,
            phraseBoost=phraseBoost,
            phraseOnly=phraseOnly,
        )
        return format_outcome(service.search(request))

    @mcp.tool()
    def index_info(source: Optional[str] = None) -> str:
        """Describe the loaded index: chunk count, build time and staleness.

        Args:
            source: Document name or PDF path selecting the index (default: last built)

        Returns:
            A one-line summary of the index
        """
        summary = service.summary(source)
        text = summary.render()
        if summary.stale and summary.pdf_path:
            text += f"\nRe-index recommended: pdfsearch index --pdf {summary.pdf_path}"
        return text

    return mcp
