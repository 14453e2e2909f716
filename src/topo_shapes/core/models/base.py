"""基础配置类"""
from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """基础配置类 - 所有描述与结果模型的基类"""

    model_config = ConfigDict(
        frozen=True,  # 不可变
        extra='forbid',  # 禁止额外字段
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
