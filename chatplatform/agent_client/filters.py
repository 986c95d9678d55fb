# chatplatform/agent_client/filters.py
"""
Filter builders cho các list_* action của Agent API
(list_archives, list_customers, list_chats, list_threads).

Mỗi aggregate được tạo rỗng, gọi chain các method by_*/with_* rồi
serialize bằng to_dict() / to_json_str() để làm body request.

Usage:
    flt = ArchivesFilters().by_groups([1, 2]).from_date("2020-01-01")
    flt.to_json_str()   # '{"group_ids":[1,2],"from":"2020-01-01"}'
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional, Union
import logging

from pydantic import Field, PlainSerializer, model_serializer

from chatplatform.base.dto_base import BaseDTO

logger = logging.getLogger(__name__)


def format_timestamp(value: Union[datetime, str]) -> str:
    """
    Format datetime theo ISO 8601 với độ phân giải microseconds.

    - 2017-10-12T14:19:21.010200Z       (UTC)
    - 2017-10-12T15:19:21.010200+01:00  (timezone khác)

    Datetime không có tzinfo được coi là UTC. String được giữ nguyên.
    """
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec="microseconds")
    if text.endswith("+00:00"):
        text = text[:-len("+00:00")] + "Z"
    return text


Timestamp = Annotated[Union[datetime, str], PlainSerializer(format_timestamp, return_type=str)]


class FilterDTO(BaseDTO):
    """
    Base cho filter DTOs.

    Khi serialize bỏ qua field chưa set (None), field còn giữ giá trị mặc định
    và field là string / list rỗng, nên aggregate rỗng luôn ra {}.
    Bool False và bound = 0 được set tường minh vẫn được gửi.
    """

    @model_serializer(mode="wrap")
    def serialize_without_empty(self, handler) -> Dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value != "" and value != []}

    def to_dict(self, exclude_none: bool = True, exclude_defaults: bool = True) -> Dict[str, Any]:
        return super().to_dict(exclude_none=exclude_none, exclude_defaults=exclude_defaults)

    def to_json_str(
        self,
        exclude_none: bool = True,
        exclude_defaults: bool = True,
        indent: Optional[int] = None
    ) -> str:
        return super().to_json_str(
            exclude_none=exclude_none,
            exclude_defaults=exclude_defaults,
            indent=indent
        )


# ========================= VALUE FILTERS =========================

class PropertyFilterType(FilterDTO):
    """
    Filter cho 1 property: hoặc check tồn tại (exists),
    hoặc match / exclude 1 tập values. Tạo bằng property_filter().
    """

    exists: Optional[bool] = None
    values: Optional[List[Any]] = None
    exclude_values: Optional[List[Any]] = None
    require_every_value: Optional[bool] = None


# namespace -> property name -> filter
PropertiesFilters = Dict[str, Dict[str, PropertyFilterType]]


def property_filter(
    includes: bool,
    values: Optional[List[Any]],
    require_every_value: bool = False
) -> PropertyFilterType:
    """
    Tạo filter cho 1 property.

    Args:
        includes: Nếu values là None -> giá trị của exists.
                  Ngược lại: True = match values, False = exclude values.
        values: Danh sách values, hoặc None để chỉ check tồn tại
        require_every_value: Chỉ match khi property chứa (hoặc không chứa)
                  tất cả values. Bị bỏ qua khi values là None.

    Returns:
        PropertyFilterType
    """
    if values is None:
        return PropertyFilterType(exists=includes)
    if includes:
        return PropertyFilterType(values=values, require_every_value=require_every_value)
    return PropertyFilterType(exclude_values=values, require_every_value=require_every_value)


class StringFilter(FilterDTO):
    values: Optional[List[str]] = None
    exclude_values: Optional[List[str]] = None


def string_filter(values: List[str], inclusive: bool) -> StringFilter:
    """`inclusive` quyết định values được match hay bị exclude."""
    if inclusive:
        return StringFilter(values=values)
    return StringFilter(exclude_values=values)


class IntegerFilter(FilterDTO):
    values: Optional[List[int]] = None
    exclude_values: Optional[List[int]] = None


def integer_filter(values: List[int], inclusive: bool) -> IntegerFilter:
    """`inclusive` quyết định values được match hay bị exclude."""
    if inclusive:
        return IntegerFilter(values=values)
    return IntegerFilter(exclude_values=values)


class RangeFilter(FilterDTO):
    """
    Khoảng giá trị số cần match. Các bound độc lập, kết hợp được
    (vd: gte + lte = đoạn đóng).

    lte - less than or equal
    lt  - less than
    gte - greater than or equal
    gt  - greater than
    eq  - equal
    """

    lte: Optional[int] = None
    lt: Optional[int] = None
    gte: Optional[int] = None
    gt: Optional[int] = None
    eq: Optional[int] = None


class DateRangeFilter(FilterDTO):
    """
    Khoảng thời gian cần match, cùng các bound như RangeFilter.

    Giá trị là datetime hoặc string ISO 8601 có microseconds,
    vd: 2017-10-12T15:19:21.010200+01:00 hoặc 2017-10-12T14:19:21.010200Z.
    """

    lte: Optional[Timestamp] = None
    lt: Optional[Timestamp] = None
    gte: Optional[Timestamp] = None
    gt: Optional[Timestamp] = None
    eq: Optional[Timestamp] = None


class EventTypesFilter(FilterDTO):
    values: Optional[List[str]] = None
    exclude_values: Optional[List[str]] = None
    require_every_value: Optional[bool] = None


class SurveyFilter(FilterDTO):
    """Survey cần match khi list archives."""

    type: str
    answer_id: str


# ========================= ARCHIVES =========================

class ArchivesFilters(FilterDTO):
    """
    Filters cho list_archives.

    Lưu ý: by_threads() xoá toàn bộ filter đã set trước đó,
    vì API không cho kết hợp thread_ids với filter khác.
    """

    agents: Optional[PropertyFilterType] = None
    group_ids: Optional[List[int]] = None
    from_: Optional[Timestamp] = Field(default=None, alias="from")
    to: Optional[Timestamp] = None
    properties: Optional[PropertiesFilters] = None
    tags: Optional[PropertyFilterType] = None
    sales: Optional[PropertyFilterType] = None
    goals: Optional[PropertyFilterType] = None
    surveys: Optional[List[SurveyFilter]] = None
    thread_ids: Optional[List[str]] = None
    query: Optional[str] = None
    event_types: Optional[EventTypesFilter] = None

    def by_agents(self, includes: bool, values: Optional[List[Any]], require_every_value: bool = False) -> ArchivesFilters:
        """Xem property_filter() để biết cách tạo filter."""
        self.agents = property_filter(includes, values, require_every_value)
        return self

    def by_groups(self, group_ids: List[int]) -> ArchivesFilters:
        self.group_ids = group_ids
        return self

    def by_threads(self, thread_ids: List[str]) -> ArchivesFilters:
        """
        Chỉ lấy archives của các thread_ids.
        Xoá mọi filter đã set trước đó (không dùng kết hợp được).
        """
        cleared = [
            name for name in type(self).model_fields
            if name != "thread_ids" and getattr(self, name) is not None
        ]
        if cleared:
            logger.debug(f"[ArchivesFilters] by_threads clears filters: {cleared}")

        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))
        self.thread_ids = thread_ids
        return self

    def by_query(self, query: str) -> ArchivesFilters:
        self.query = query
        return self

    def from_date(self, date: Union[datetime, str]) -> ArchivesFilters:
        """Bỏ các entries trước `date`."""
        self.from_ = date
        return self

    def to_date(self, date: Union[datetime, str]) -> ArchivesFilters:
        """Bỏ các entries sau `date`."""
        self.to = date
        return self

    def by_properties(self, properties: PropertiesFilters) -> ArchivesFilters:
        self.properties = properties
        return self

    def by_surveys(self, surveys: List[SurveyFilter]) -> ArchivesFilters:
        self.surveys = surveys
        return self

    def by_tags(self, includes: bool, values: Optional[List[Any]], require_every_value: bool = False) -> ArchivesFilters:
        self.tags = property_filter(includes, values, require_every_value)
        return self

    def by_sales(self, includes: bool, values: Optional[List[Any]], require_every_value: bool = False) -> ArchivesFilters:
        self.sales = property_filter(includes, values, require_every_value)
        return self

    def by_goals(self, includes: bool, values: Optional[List[Any]], require_every_value: bool = False) -> ArchivesFilters:
        self.goals = property_filter(includes, values, require_every_value)
        return self

    def by_event_types(self, includes: bool, values: Optional[List[str]], require_every_value: bool = False) -> ArchivesFilters:
        """
        includes=True  -> event_types.values
        includes=False -> event_types.exclude_values
        require_every_value luôn được set.
        """
        if includes:
            self.event_types = EventTypesFilter(values=values, require_every_value=require_every_value)
        else:
            self.event_types = EventTypesFilter(exclude_values=values, require_every_value=require_every_value)
        return self


# ========================= CUSTOMERS =========================

class CustomersFilters(FilterDTO):
    """Filters cho list_customers."""

    country: Optional[StringFilter] = None
    email: Optional[StringFilter] = None
    name: Optional[StringFilter] = None
    customer_id: Optional[StringFilter] = None
    chat_group_ids: Optional[IntegerFilter] = None
    chats_count: Optional[RangeFilter] = None
    threads_count: Optional[RangeFilter] = None
    visits_count: Optional[RangeFilter] = None
    created_at: Optional[DateRangeFilter] = None
    agent_last_event_created_at: Optional[DateRangeFilter] = None
    customer_last_event_created_at: Optional[DateRangeFilter] = None
    include_customers_without_chats: Optional[bool] = None

    def by_country(self, values: List[str], inclusive: bool = True) -> CustomersFilters:
        self.country = string_filter(values, inclusive)
        return self

    def by_email(self, values: List[str], inclusive: bool = True) -> CustomersFilters:
        self.email = string_filter(values, inclusive)
        return self

    def by_name(self, values: List[str], inclusive: bool = True) -> CustomersFilters:
        self.name = string_filter(values, inclusive)
        return self

    def by_id(self, values: List[str], inclusive: bool = True) -> CustomersFilters:
        self.customer_id = string_filter(values, inclusive)
        return self

    def by_chat_group_ids(self, values: List[int], inclusive: bool = True) -> CustomersFilters:
        self.chat_group_ids = integer_filter(values, inclusive)
        return self

    def by_chats_count(self, ranges: Optional[RangeFilter]) -> CustomersFilters:
        self.chats_count = ranges
        return self

    def by_threads_count(self, ranges: Optional[RangeFilter]) -> CustomersFilters:
        self.threads_count = ranges
        return self

    def by_visits_count(self, ranges: Optional[RangeFilter]) -> CustomersFilters:
        self.visits_count = ranges
        return self

    def by_creation_time(self, time_range: Optional[DateRangeFilter]) -> CustomersFilters:
        self.created_at = time_range
        return self

    def by_agents_last_activity(self, time_range: Optional[DateRangeFilter]) -> CustomersFilters:
        """Thời điểm event cuối cùng của agent với customer."""
        self.agent_last_event_created_at = time_range
        return self

    def by_customers_last_activity(self, time_range: Optional[DateRangeFilter]) -> CustomersFilters:
        self.customer_last_event_created_at = time_range
        return self

    def with_include_customers_without_chats(self, value: bool) -> CustomersFilters:
        """Include (True) hoặc exclude (False) customers chưa có chat nào."""
        self.include_customers_without_chats = value
        return self


# ========================= CHATS =========================

class ChatsFilters(FilterDTO):
    """
    Filters cho list_chats.

    Mặc định include cả active chats (include_active=True, giống default của API)
    nên chỉ gửi include_active khi đã gọi without_active_chats().
    """

    include_active: bool = True
    include_chats_without_threads: bool = False
    group_ids: Optional[List[int]] = None
    properties: Optional[PropertiesFilters] = None

    def without_active_chats(self) -> ChatsFilters:
        self.include_active = False
        return self

    def with_chats_without_threads(self) -> ChatsFilters:
        self.include_chats_without_threads = True
        return self

    def by_groups(self, group_ids: List[int]) -> ChatsFilters:
        self.group_ids = group_ids
        return self

    def by_properties(self, properties: PropertiesFilters) -> ChatsFilters:
        self.properties = properties
        return self


# ========================= THREADS =========================

class ThreadsFilters(FilterDTO):
    """Filters cho list_threads."""

    from_: Optional[Timestamp] = Field(default=None, alias="from")
    to: Optional[Timestamp] = None

    def from_date(self, date: Union[datetime, str]) -> ThreadsFilters:
        self.from_ = date
        return self

    def to_date(self, date: Union[datetime, str]) -> ThreadsFilters:
        self.to = date
        return self
