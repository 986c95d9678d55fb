# chatplatform/base/dto_base.py
"""
Base DTO class using Pydantic for all request/response objects.
Provides validation on assignment, JSON serialization, and type safety.
"""

from pydantic import BaseModel, ConfigDict
from typing import Dict, Any, Optional


class BaseDTO(BaseModel):
    """
    Base class cho tất cả DTOs gửi lên / nhận về từ Agent API.

    Features:
    - Validation qua Pydantic (cả lúc khởi tạo lẫn lúc gán field)
    - JSON serialization/deserialization
    - Snake_case field names (giống Agent API)

    Usage:
        class MyDTO(BaseDTO):
            id: str
            name: Optional[str] = None

        dto = MyDTO.from_dict({"id": "abc"})
        data = dto.to_dict()
        json_str = dto.to_json_str()
    """

    model_config = ConfigDict(
        # Field có alias (vd: "from") vẫn set được bằng tên Python
        populate_by_name=True,

        use_enum_values=True,

        # Validate on assignment (builders mutate fields after init)
        validate_assignment=True,
    )

    def to_dict(self, exclude_none: bool = True, exclude_defaults: bool = False) -> Dict[str, Any]:
        """
        Convert DTO to a JSON-ready dictionary.

        Args:
            exclude_none: If True, không include fields có giá trị None
            exclude_defaults: If True, bỏ fields còn giữ giá trị mặc định

        Returns:
            Dict với tất cả fields
        """
        return self.model_dump(
            by_alias=True,
            exclude_none=exclude_none,
            exclude_defaults=exclude_defaults,
            mode='json'
        )

    def to_json_str(
        self,
        exclude_none: bool = True,
        exclude_defaults: bool = False,
        indent: Optional[int] = None
    ) -> str:
        """
        Convert DTO to JSON string.

        Args:
            exclude_none: If True, không include fields có giá trị None
            exclude_defaults: If True, bỏ fields còn giữ giá trị mặc định
            indent: Số spaces để indent (None = compact)

        Returns:
            JSON string
        """
        return self.model_dump_json(
            by_alias=True,
            exclude_none=exclude_none,
            exclude_defaults=exclude_defaults,
            indent=indent
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Create DTO from dictionary.

        Raises:
            ValidationError: Nếu data không hợp lệ
        """
        if not data:
            return None
        return cls.model_validate(data)

    @classmethod
    def from_json_str(cls, json_str: str):
        """Create DTO from JSON string."""
        return cls.model_validate_json(json_str)
