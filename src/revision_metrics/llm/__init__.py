from .openai_client import OpenAISummaryClient, SummaryMetadata

__all__ = ["OpenAISummaryClient", "SummaryMetadata"]
