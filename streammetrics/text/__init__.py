from .bleu import Bleu
from .edit import EditDistance
from .rouge import Rouge
from .similarity import SentenceSimilarity, TransformerVectorizer, Vectorizer
from .tokenize import lcs_length, levenshtein_distance, ngram_counts, tokenize, tokenize_sentences

__all__ = [
    "Bleu",
    "Rouge",
    "EditDistance",
    "SentenceSimilarity",
    "TransformerVectorizer",
    "Vectorizer",
    "tokenize",
    "tokenize_sentences",
    "ngram_counts",
    "lcs_length",
    "levenshtein_distance",
]
