"""全ドメインモデルの基底クラス。"""

from pydantic import BaseModel, ConfigDict


class GrepdiffBaseModel(BaseModel):
    """全ドメインモデルの基底クラス。extra="forbid" で厳格モードを一元管理。"""

    model_config = ConfigDict(extra="forbid", frozen=True)
