"""
Tokenizer and similarity utilities.

Word tokenization, Porter stemming and a TF-IDF index used to measure how
strongly requirement texts overlap. The TF-IDF measure is the plain sum of
``tf * idf`` over query terms, so the ``> 0.2`` relatedness cutoff used by the
dependency linker is meaningful against it.
"""

from __future__ import annotations
import math
from typing import Dict, List, Optional

from nltk.stem.porter import PorterStemmer
from nltk.tokenize import RegexpTokenizer


# English stop words dropped before stemming and indexing
STOP_WORDS = frozenset([
    'about', 'above', 'after', 'again', 'all', 'also', 'am', 'an', 'and',
    'another', 'any', 'are', 'as', 'at', 'be', 'because', 'been', 'before',
    'being', 'below', 'between', 'both', 'but', 'by', 'came', 'can', 'cannot',
    'come', 'could', 'did', 'do', 'does', 'doing', 'during', 'each', 'few',
    'for', 'from', 'further', 'get', 'got', 'has', 'had', 'he', 'have', 'her',
    'here', 'him', 'himself', 'his', 'how', 'if', 'in', 'into', 'is', 'it',
    'its', 'itself', 'like', 'make', 'many', 'me', 'might', 'more', 'most',
    'much', 'must', 'my', 'myself', 'never', 'now', 'of', 'on', 'only', 'or',
    'other', 'our', 'ours', 'ourselves', 'out', 'over', 'own', 'said', 'same',
    'see', 'should', 'since', 'so', 'some', 'still', 'such', 'take', 'than',
    'that', 'the', 'their', 'theirs', 'them', 'themselves', 'then', 'there',
    'these', 'they', 'this', 'those', 'through', 'to', 'too', 'under', 'until',
    'up', 'very', 'was', 'way', 'we', 'well', 'were', 'what', 'where', 'when',
    'which', 'while', 'who', 'whom', 'with', 'would', 'why', 'you', 'your',
    'yours', 'yourself',
    'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i', 'j', 'k', 'l', 'm', 'n', 'o',
    'p', 'q', 'r', 's', 't', 'u', 'v', 'w', 'x', 'y', 'z',
    '$', '1', '2', '3', '4', '5', '6', '7', '8', '9', '0', '_',
])

_word_tokenizer = RegexpTokenizer(r"[A-Za-zА-Яа-я0-9_]+")
_stemmer = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)


def tokenize(text: str) -> List[str]:
    """Split text into word tokens (letters, digits, underscore)."""
    return _word_tokenizer.tokenize(text)


def stem(word: str) -> str:
    """Porter-stem a single lowercase word."""
    return _stemmer.stem(word)


def tokenize_and_stem(text: str, keep_stops: bool = False) -> List[str]:
    """Lowercase, tokenize, drop stop words (unless asked not to) and stem."""
    tokens = tokenize(text.lower())
    if not keep_stops:
        tokens = [token for token in tokens if token not in STOP_WORDS]
    return [stem(token) for token in tokens]


class TfIdf:
    """
    Minimal TF-IDF index over a list of documents.

    Documents are stored as term-frequency maps. ``idf`` uses
    ``1 + ln(N / (1 + df))`` and ``measure`` sums ``tf * idf`` over every
    query term (repeated query terms count again).
    """

    def __init__(self):
        self.documents: List[Dict[str, int]] = []
        self._idf_cache: Dict[str, float] = {}

    def add_document(self, text: str) -> None:
        """Index a document; string input is lowercased and stop-filtered."""
        document: Dict[str, int] = {}
        for term in tokenize(text.lower()):
            if term in STOP_WORDS:
                continue
            document[term] = document.get(term, 0) + 1
        self.documents.append(document)
        self._idf_cache.clear()

    def idf(self, term: str) -> float:
        if term in self._idf_cache:
            return self._idf_cache[term]

        docs_with_term = sum(1 for document in self.documents if term in document)
        if not self.documents:
            value = 0.0
        else:
            value = 1 + math.log(len(self.documents) / (1 + docs_with_term))

        self._idf_cache[term] = value
        return value

    def measure(self, query: str, index: int) -> float:
        """TF-IDF measure of ``query`` against the document at ``index``."""
        document = self.documents[index]
        return sum(
            document.get(term, 0) * self.idf(term)
            for term in tokenize(query.lower())
        )

    def measures(self, query: str) -> List[float]:
        """Measure of ``query`` against every indexed document, in order."""
        return [self.measure(query, index) for index in range(len(self.documents))]

    def __len__(self) -> int:
        return len(self.documents)


def build_index(texts: List[str]) -> TfIdf:
    """Build a TF-IDF index over the stemmed form of each text."""
    index = TfIdf()
    for text in texts:
        index.add_document(" ".join(tokenize_and_stem(text)))
    return index


def top_terms(text: str, limit: Optional[int] = None, min_length: int = 0) -> List[str]:
    """Most frequent lowercase tokens longer than ``min_length``, descending."""
    counts: Dict[str, int] = {}
    for token in tokenize(text):
        if len(token) > min_length:
            token = token.lower()
            counts[token] = counts.get(token, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    terms = [term for term, _ in ranked]
    return terms[:limit] if limit is not None else terms
