# layer/src/azuraforge_layer/config.py
"""
Katman konfigürasyonu. Pydantic ile doğrulanır; katman şekli, aktivasyon,
dropout ve eğitim (solver) ayarlarını tek bir kayıtta toplar.
"""
import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .activations import available_activations

logger = logging.getLogger(__name__)


class LayerConfig(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    n_in: int = Field(gt=0)
    n_out: int = Field(gt=0)
    activation: str = "sigmoid"
    dropout: float = Field(default=0.0, ge=0.0, le=1.0)
    concat_biases: bool = False
    weight_init: Literal["xavier", "he", "uniform", "zero"] = "xavier"

    # Solver ayarları
    loss: Literal["mse", "cross_entropy"] = "mse"
    optimizer: Literal["sgd", "adam"] = "sgd"
    lr: float = Field(default=0.1, gt=0.0)
    num_iterations: int = Field(default=100, ge=1)
    max_grad_norm: Optional[float] = Field(default=None, gt=0.0)
    seed: Optional[int] = None

    # Callback nesneleri; doğrulanmaz, klonlarla paylaşılır.
    listeners: List[Any] = Field(default_factory=list, exclude=True)

    @field_validator("activation")
    @classmethod
    def _known_activation(cls, value: str) -> str:
        if value not in available_activations():
            raise ValueError(f"unknown activation '{value}', expected one of {available_activations()}")
        return value

    @field_validator("loss")
    @classmethod
    def _loss_matches_activation(cls, value: str, info: ValidationInfo) -> str:
        # cross_entropy logits üzerinde softmax varsayar; skor, katmanın çıktısıyla aynı fonksiyonu tanımlamalı.
        activation = info.data.get("activation")
        if value == "cross_entropy" and activation is not None and activation != "softmax":
            raise ValueError(f"loss 'cross_entropy' requires activation 'softmax', got '{activation}'")
        return value

    def with_widths(self, n_in: int, n_out: int) -> "LayerConfig":
        """Giriş/çıkış genişlikleri değiştirilmiş bir kopya döndürür (orijinal değişmez)."""
        return self.model_copy(update={"n_in": n_in, "n_out": n_out})


def build_config(raw: Dict[str, Any]) -> LayerConfig:
    """
    Ham bir sözlüğü LayerConfig'e dönüştürür. Bilinmeyen anahtarlar yok sayılır.
    Doğrulama hatası, alan bazında açıklamalarla ValueError olarak yükseltilir.
    """
    known = {k: v for k, v in raw.items() if k in LayerConfig.model_fields}
    ignored = sorted(set(raw) - set(known))
    if ignored:
        logger.info(f"Ignoring unknown config keys: {ignored}")
    try:
        return LayerConfig(**known)
    except ValidationError as e:
        logger.error(f"Layer config validation failed: {e}")
        error_details = "\n".join([f"  - Field '{err['loc'][0]}': {err['msg']}" for err in e.errors()])
        raise ValueError(f"Invalid layer configuration:\n{error_details}") from e
