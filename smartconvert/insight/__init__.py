from smartconvert.insight.factory import SummarizerFactory
from smartconvert.insight.summarizer import DocumentSummarizer

__all__ = ["DocumentSummarizer", "SummarizerFactory"]
