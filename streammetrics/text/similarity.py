"""Embedding-based sentence similarity.

The metric never loads a model itself: it is given a vectorizer, any object
with ``embed(sentences) -> Tensor`` of shape ``(N, D)``, and compares the
candidate and reference embeddings with cosine similarity.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

import torch
import torch.nn.functional as F
from torch import Tensor

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError
from ..core.reduction import MetricAggregator, Reduction
from ..utils import METRIC_REGISTRY
from ..utils.validation import check_text_batch, verify_strings

logger = logging.getLogger(__name__)


class Vectorizer(Protocol):
    def embed(self, sentences: Sequence[str]) -> Tensor:
        """Return one embedding row per sentence."""


def cosine_similarity(a: Tensor, b: Tensor) -> Tensor:
    """Row-wise cosine similarity; a zero vector scores 0.0."""
    a = a.to(torch.float64)
    b = b.to(torch.float64)
    sims = F.cosine_similarity(a, b, dim=-1, eps=1e-12)
    zero = (a.norm(dim=-1) == 0) | (b.norm(dim=-1) == 0)
    return torch.where(zero, torch.zeros_like(sims), sims)


class TransformerVectorizer:
    """Mean-pooled sentence embeddings from a Hugging Face encoder.

    Requires the `transformers` library; the model is downloaded on first use.
    """

    def __init__(
        self,
        pretrained_model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        max_seq_length: int = 128,
        device: str = "cpu",
    ):
        self.pretrained_model_name = pretrained_model_name
        self.max_seq_length = max_seq_length
        self.device = torch.device(device)
        self._tokenizer = None
        self._model = None

    def _load(self) -> None:
        try:
            from transformers import AutoModel, AutoTokenizer
        except ImportError:
            raise ImportError(
                "transformers library is required for TransformerVectorizer. "
                "Install it with: pip install transformers"
            )
        logger.info(f"Loading sentence encoder '{self.pretrained_model_name}'...")
        self._tokenizer = AutoTokenizer.from_pretrained(self.pretrained_model_name)
        self._model = AutoModel.from_pretrained(self.pretrained_model_name).to(self.device)
        self._model.eval()

    @staticmethod
    def mean_pooling(sequence_output: Tensor, attention_mask: Tensor) -> Tensor:
        """Average pool over non-padding tokens.

        Args:
            sequence_output: (B, L, H)
            attention_mask:  (B, L)

        Returns:
            (B, H) sentence embedding
        """
        mask = attention_mask.unsqueeze(-1).float()       # (B, L, 1)
        summed = (sequence_output * mask).sum(dim=1)      # (B, H)
        lengths = mask.sum(dim=1).clamp(min=1e-9)         # (B, 1)
        return summed / lengths

    @torch.no_grad()
    def embed(self, sentences: Sequence[str]) -> Tensor:
        if self._model is None:
            self._load()
        enc = self._tokenizer(
            list(sentences),
            max_length=self.max_seq_length,
            truncation=True,
            padding=True,
            return_tensors="pt",
        )
        enc = {k: v.to(self.device) for k, v in enc.items()}
        outputs = self._model(**enc)
        return self.mean_pooling(outputs.last_hidden_state, enc["attention_mask"]).cpu()


@METRIC_REGISTRY.register("sentence_similarity")
class SentenceSimilarity(BaseMetric):
    """Cosine similarity between candidate and reference embeddings.

    Per-pair similarities are folded into a ``MetricAggregator``; the
    default reduction reports their mean.
    """

    name = "sentence_similarity"

    def __init__(self, vectorizer: Vectorizer | None = None, reduction: Reduction | str = Reduction.MEAN):
        self.vectorizer = vectorizer if vectorizer is not None else TransformerVectorizer()
        self.aggregator = MetricAggregator(reduction)
        super().__init__()

    def _embed(self, sentences: Sequence[str], expected_rows: int) -> Tensor:
        embeddings = torch.as_tensor(self.vectorizer.embed(sentences))
        if embeddings.dim() != 2 or embeddings.shape[0] != expected_rows:
            raise IncompatibleInputError(
                f"embeddings of shape ({expected_rows}, D)", f"{tuple(embeddings.shape)}"
            )
        return embeddings

    def similarities(self, predictions: Sequence[str], targets: Sequence[str]) -> Tensor:
        """Per-pair cosine similarities for one batch, without touching state."""
        size = check_text_batch(predictions, targets)
        verify_strings(targets, "targets")
        pred_emb = self._embed(predictions, size)
        target_emb = self._embed(targets, size)
        if pred_emb.shape[1] != target_emb.shape[1]:
            raise IncompatibleInputError(
                "candidate and reference embeddings of equal width",
                f"{pred_emb.shape[1]} and {target_emb.shape[1]}",
            )
        return cosine_similarity(pred_emb, target_emb)

    def update(self, predictions: Sequence[str], targets: Sequence[str]) -> None:
        self.aggregator.update(self.similarities(predictions, targets))

    def compute(self) -> float | None:
        return self.aggregator.compute()

    def reset(self) -> None:
        self.aggregator.reset()
