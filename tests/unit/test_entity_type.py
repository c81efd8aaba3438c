"""
Тесты для EntityType (сборка модели, таблицы полей и валидаторов)

Проверяет:
1. construct: single / batch, устойчивость к пустым и некорректным данным
2. Derive-хук вызывается ровно один раз на запись
3. unserialize не вычисляет derived поля
4. Проверки согласованности при объявлении типа
5. Immutability созданных сущностей
6. Wire-флаги 0/1 в bool_fields: bool при construct, 0/1 при serialize
"""

from collections.abc import Mapping
from typing import Any, Optional

import pytest
from pydantic import Field, ValidationError

from src.core.wire import DataDefinition, DataDefinitionError, EntityType, WireModel


# =============================================================================
# FIXTURES
# =============================================================================


class Quote(WireModel):
    symbol: Optional[str] = Field(None)
    price: Optional[float] = Field(None)
    label: Optional[str] = Field(None)


QUOTE_FIELDS = DataDefinition({"symbol": 0, "price": 2, "label": None})


def positive(value: Any, field_name: str, record: Mapping[str, Any]) -> Optional[str]:
    if not isinstance(value, (int, float)) or value <= 0:
        return "must be positive"
    return None


class CountingDerive:
    """Derive-хук, считающий вызовы"""

    def __init__(self):
        self.calls = 0

    def __call__(self, record: Mapping[str, Any]) -> dict[str, Any]:
        self.calls += 1
        symbol = record["symbol"]
        return {"label": symbol.lower() if isinstance(symbol, str) else None}


@pytest.fixture
def derive() -> CountingDerive:
    return CountingDerive()


@pytest.fixture
def quote_type(derive: CountingDerive) -> EntityType[Quote]:
    return EntityType(
        name="quote",
        model=Quote,
        definition=QUOTE_FIELDS,
        validators={"price": positive},
        derive=derive,
    )


# =============================================================================
# CONSTRUCT
# =============================================================================


class TestConstruct:
    """Создание сущностей"""

    def test_single_from_array(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(["tBTCUSD", "ignored", 42000.5])
        assert isinstance(quote, Quote)
        assert quote.symbol == "tBTCUSD"
        assert quote.price == 42000.5
        assert quote.label == "tbtcusd"

    def test_single_from_dict(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct({"symbol": "tETHUSD", "price": 3000})
        assert quote.price == 3000
        assert quote.label == "tethusd"

    def test_batch(self, quote_type: EntityType[Quote]) -> None:
        quotes = quote_type.construct([["tA", None, 1], ["tB", None, 2], ["tC", None, 3]])
        assert isinstance(quotes, list)
        assert [q.symbol for q in quotes] == ["tA", "tB", "tC"]

    def test_derive_called_once_per_record(
        self, quote_type: EntityType[Quote], derive: CountingDerive
    ) -> None:
        quote_type.construct([["tA", None, 1], ["tB", None, 2]])
        assert derive.calls == 2

    @pytest.mark.parametrize("empty", [None, [], {}])
    def test_empty_input_gives_unset_instance(self, quote_type: EntityType[Quote], empty) -> None:
        quote = quote_type.construct(empty)
        assert isinstance(quote, Quote)
        assert quote.symbol is None
        assert quote.price is None
        assert quote.label is None

    def test_no_type_coercion(self, quote_type: EntityType[Quote]) -> None:
        """Конструктор не проверяет типы: это задача validate"""
        quote = quote_type.construct(["tBTCUSD", None, "not-a-price"])
        assert quote.price == "not-a-price"
        assert quote_type.validate(quote) is not None

    def test_malformed_input_does_not_raise(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(12345)
        assert quote.symbol is None

    def test_construct_many(self, quote_type: EntityType[Quote]) -> None:
        assert len(quote_type.construct_many(["tA", None, 1])) == 1
        assert len(quote_type.construct_many([["tA", None, 1], ["tB", None, 2]])) == 2

    def test_from_instance(self, quote_type: EntityType[Quote]) -> None:
        original = quote_type.construct(["tBTCUSD", None, 1.0])
        copy = quote_type.construct(original)
        assert copy == original
        assert copy is not original

    def test_instances_are_frozen(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(["tBTCUSD", None, 1.0])
        with pytest.raises(ValidationError):
            quote.price = 2.0  # type: ignore

    def test_to_record(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(["tBTCUSD", None, 1.0])
        assert quote.to_record() == {"symbol": "tBTCUSD", "price": 1.0, "label": "tbtcusd"}


# =============================================================================
# TRANSFORM / VALIDATE
# =============================================================================


class TestTransform:
    """unserialize / serialize / validate через тип сущности"""

    def test_unserialize_skips_derive(
        self, quote_type: EntityType[Quote], derive: CountingDerive
    ) -> None:
        record = quote_type.unserialize(["tBTCUSD", None, 1.0])
        assert record == {"symbol": "tBTCUSD", "price": 1.0, "label": None}
        assert derive.calls == 0

    def test_serialize_instance(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(["tBTCUSD", "x", 1.0])
        assert quote_type.serialize(quote) == ["tBTCUSD", None, 1.0]

    def test_serialize_batch_of_instances(self, quote_type: EntityType[Quote]) -> None:
        quotes = quote_type.construct([["tA", None, 1], ["tB", None, 2]])
        assert quote_type.serialize(quotes) == [["tA", None, 1], ["tB", None, 2]]

    def test_validate_instance_and_raw(self, quote_type: EntityType[Quote]) -> None:
        quote = quote_type.construct(["tBTCUSD", None, 1.0])
        assert quote_type.validate(quote) is None
        assert quote_type.validate(["tBTCUSD", None, 1.0]) is None
        assert quote_type.is_valid([quote, quote])

    def test_validate_failure(self, quote_type: EntityType[Quote]) -> None:
        failure = quote_type.validate([["tA", None, 1], ["tB", None, -2]])
        assert failure is not None
        assert (failure.field, failure.index, failure.value) == ("price", 1, -2)


# =============================================================================
# BOOL FIELDS
# =============================================================================


class Switch(WireModel):
    symbol: Optional[str] = Field(None)
    active: Optional[bool] = Field(None)


SWITCH_FIELDS = DataDefinition({"symbol": 0, "active": 1})


@pytest.fixture
def switch_type() -> EntityType[Switch]:
    return EntityType(
        name="switch",
        model=Switch,
        definition=SWITCH_FIELDS,
        bool_fields=frozenset({"active"}),
    )


class TestBoolFields:
    """Wire-флаги 0/1 ↔ bool"""

    @pytest.mark.parametrize("flag, expected", [(0, False), (1, True), (True, True), (False, False)])
    def test_construct_gives_bool(self, switch_type: EntityType[Switch], flag, expected: bool) -> None:
        switch = switch_type.construct(["tBTCUSD", flag])
        assert switch.active is expected

    @pytest.mark.parametrize("raw", [None, 5, "1", 0.5])
    def test_other_values_kept_as_is(self, switch_type: EntityType[Switch], raw) -> None:
        assert switch_type.construct(["tBTCUSD", raw]).active == raw

    def test_serialize_writes_flags(self, switch_type: EntityType[Switch]) -> None:
        array = switch_type.serialize(switch_type.construct(["tBTCUSD", 1]))
        assert array == ["tBTCUSD", 1]
        assert type(array[1]) is int

    def test_serialize_batch(self, switch_type: EntityType[Switch]) -> None:
        switches = [Switch(symbol="tA", active=True), Switch(symbol="tB", active=False)]
        arrays = switch_type.serialize(switches)
        assert arrays == [["tA", 1], ["tB", 0]]
        assert all(type(array[1]) is int for array in arrays)

    def test_unserialize_keeps_wire_flags(self, switch_type: EntityType[Switch]) -> None:
        record = switch_type.unserialize(["tBTCUSD", 1])
        assert type(record["active"]) is int

    def test_undeclared_bool_field(self) -> None:
        with pytest.raises(DataDefinitionError) as exc_info:
            EntityType(
                name="switch",
                model=Switch,
                definition=SWITCH_FIELDS,
                bool_fields=frozenset({"enabled"}),
            )
        assert "enabled" in str(exc_info.value)


# =============================================================================
# DECLARATION CHECKS
# =============================================================================


class TestDeclarationChecks:
    """Ошибки объявления типа сущности"""

    def test_model_fields_must_match_definition(self) -> None:
        with pytest.raises(DataDefinitionError) as exc_info:
            EntityType(
                name="quote",
                model=Quote,
                definition=DataDefinition({"symbol": 0, "price": 1}),
            )
        assert "label" in str(exc_info.value)

    def test_validator_for_undeclared_field(self) -> None:
        with pytest.raises(DataDefinitionError):
            EntityType(
                name="quote",
                model=Quote,
                definition=QUOTE_FIELDS,
                validators={"volume": positive},
            )

    def test_derive_returning_undeclared_field(self) -> None:
        entity_type = EntityType(
            name="quote",
            model=Quote,
            definition=QUOTE_FIELDS,
            derive=lambda record: {"unknown": 1},
        )
        with pytest.raises(DataDefinitionError):
            entity_type.construct(["tBTCUSD", None, 1.0])

    def test_validators_mapping_read_only(self, quote_type: EntityType[Quote]) -> None:
        with pytest.raises(TypeError):
            quote_type.validators["symbol"] = positive  # type: ignore[index]
