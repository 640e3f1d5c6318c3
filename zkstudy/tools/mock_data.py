"""
Fixture articles for the fetch-news tool.

Hardcoded source material so the research pipeline can run end to end
without a live search backend. Order is significant: the tool always
returns a prefix of this list.
"""

from typing import Dict, List


MOCK_ARTICLES: List[Dict[str, str]] = [
    {
        "title": "AI Advances in 2024",
        "content": (
            "Recent developments in artificial intelligence show promising "
            "results in various fields..."
        ),
    },
    {
        "title": "The Future of Technology",
        "content": "Emerging technologies are reshaping how we live and work...",
    },
    {
        "title": "Innovation in Tech Industry",
        "content": (
            "Leading companies are pushing boundaries in technological innovation..."
        ),
    },
    {
        "title": "Recursive SNARKs and Proof Aggregation",
        "content": (
            "Folding schemes such as Nova make it cheap to aggregate many proofs "
            "into one, cutting on-chain verification costs for rollups."
        ),
    },
    {
        "title": "zkSNARKs for Rollup Scalability",
        "content": (
            "Validity rollups batch thousands of transactions off-chain and post a "
            "single succinct proof, raising throughput without weakening security."
        ),
    },
    {
        "title": "Transparent Setups with zkSTARKs",
        "content": (
            "STARK-based systems avoid a trusted setup and rely on hash functions, "
            "trading larger proofs for post-quantum assumptions."
        ),
    },
    {
        "title": "Zero Knowledge Proofs for Machine Learning",
        "content": (
            "zkML research proves that a model inference was computed correctly "
            "without revealing the weights or the private input."
        ),
    },
    {
        "title": "Lookup Arguments in Modern Proof Systems",
        "content": (
            "Plookup-style arguments reduce the cost of non-arithmetic operations, "
            "making range checks and hashing inside circuits far cheaper."
        ),
    },
    {
        "title": "Hardware Acceleration for Prover Performance",
        "content": (
            "GPU and FPGA provers speed up multi-scalar multiplication and FFTs, "
            "the two dominant costs of SNARK proof generation."
        ),
    },
    {
        "title": "Privacy-Preserving Identity with ZK Credentials",
        "content": (
            "Selective-disclosure credentials let users prove attributes such as "
            "age or membership without exposing the underlying document."
        ),
    },
]


def get_mock_articles(limit: int) -> List[Dict[str, str]]:
    """Return the first `limit` fixture articles, in fixture order."""
    return [dict(article) for article in MOCK_ARTICLES[:limit]]
