"""
arXiv Research Specialist Agent (arxiv-agent)

A small conversational agent that joins Open Floor style multi-agent
dialogs. It reads conversation envelopes, picks out the utterances that are
addressed to it, and answers academic queries with a summary of matching
arXiv papers.

Pipeline (per addressed utterance):
- Intent     = keyword classifier decides whether the query is academic
- Search     = rate-limited call to the arXiv export API
- Extract    = tolerant scan of the Atom text into paper records
- Synthesis  = numbered paper list + quality assessment
"""
__all__ = ["agents"]
__version__ = "0.1.0"
