"""Tests for building the ECU/message/signal model."""

import copy
import dataclasses

import pytest
from canview.model.builder import NULL_SENDER, BuilderConfig, build, resolve_signal_type
from canview.model.document import (
    NO_TRANSMITTER,
    DocumentMessage,
    DocumentSignal,
    SchemaDocument,
)
from canview.model.tree import BoolType, ByteOrder, EnumType, LinearType, SignalKind


def _message(frame_id: int, name: str, transmitter=NO_TRANSMITTER, signals=()) -> DocumentMessage:
    return DocumentMessage(
        frame_id=frame_id,
        name=name,
        length_bytes=8,
        transmitter=transmitter,
        signals=list(signals),
    )


class TestSignalTypeResolution:
    """Tests for resolve_signal_type."""

    def test_single_bit_is_bool(self) -> None:
        raw = DocumentSignal(name="Flag", start_bit=3, length_bits=1)

        assert resolve_signal_type(raw, ()) == BoolType()

    def test_single_bit_ignores_value_table(self) -> None:
        """Test that a one-bit signal stays a bool even with a value table."""
        raw = DocumentSignal(name="Flag", start_bit=0, length_bits=1)

        resolved = resolve_signal_type(raw, [(0, "Off"), (1, "On")])

        assert resolved.kind is SignalKind.BOOL

    def test_value_table_makes_enum_sorted(self) -> None:
        raw = DocumentSignal(name="Gear", start_bit=0, length_bits=4)

        resolved = resolve_signal_type(raw, [(3, "C"), (1, "A"), (2, "B")])

        assert resolved == EnumType(((1, "A"), (2, "B"), (3, "C")))

    def test_value_table_entries_coerced(self) -> None:
        raw = DocumentSignal(name="Mode", start_bit=0, length_bits=2)

        resolved = resolve_signal_type(raw, [(2.0, "Two"), (True, 1)])

        assert resolved == EnumType(((1, "1"), (2, "Two")))

    def test_empty_value_table_is_linear(self) -> None:
        raw = DocumentSignal(name="Speed", start_bit=0, length_bits=16, scale=0.01, offset=-5)

        resolved = resolve_signal_type(raw, [])

        assert resolved == LinearType(multiplier=0.01, offset=-5)


class TestBuild:
    """Tests for build."""

    @pytest.fixture
    def document(self) -> SchemaDocument:
        """Two ECUs, one of them sending two messages, plus an orphan message."""
        return SchemaDocument(
            messages=[
                _message(0x100, "EngineStatus", "ECU_A", [
                    DocumentSignal(name="Rpm", start_bit=0, length_bits=16, scale=0.25, unit="rpm"),
                    DocumentSignal(name="Running", start_bit=16, length_bits=1),
                    DocumentSignal(name="Gear", start_bit=24, length_bits=4),
                ]),
                _message(0x200, "BrakeStatus", "ECU_B", [
                    DocumentSignal(name="Pressure", start_bit=0, length_bits=12, is_signed=True,
                                   byte_order=ByteOrder.BIG_ENDIAN),
                ]),
                _message(0x101, "EngineTemps", "ECU_A"),
                _message(0x300, "Orphan"),
            ],
            signal_comments={(0x100, "Rpm"): "Engine speed"},
            message_comments={0x200: "Brake data"},
            value_tables={
                (0x100, "Gear"): [(3, "Third"), (1, "First"), (2, "Second")],
                (0x100, "Running"): [(0, "No"), (1, "Yes")],
            },
        )

    def test_groups_messages_by_transmitter(self, document: SchemaDocument) -> None:
        model = build(document)

        assert [ecu.name for ecu in model.ecus] == ["ECU_A", "ECU_B", NULL_SENDER]
        ecu_a = model.get_ecu("ECU_A")
        assert ecu_a is not None
        assert [m.frame_id for m in ecu_a.messages] == [0x100, 0x101]

    def test_null_sender_name(self, document: SchemaDocument) -> None:
        model = build(document)

        orphan_ecu = model.get_ecu("NULL SENDER")
        assert orphan_ecu is not None
        assert orphan_ecu.messages[0].name == "Orphan"

    def test_null_sender_name_configurable(self, document: SchemaDocument) -> None:
        model = build(document, BuilderConfig(null_sender_name="Unassigned"))

        assert model.get_ecu("Unassigned") is not None
        assert model.get_ecu(NULL_SENDER) is None

    def test_comments_resolved(self, document: SchemaDocument) -> None:
        model = build(document)

        engine = model.find_messages(0x100)[0]
        assert engine.comment is None
        assert engine.get_signal("Rpm").comment == "Engine speed"
        assert engine.get_signal("Gear").comment is None
        assert model.find_messages(0x200)[0].comment == "Brake data"

    def test_signal_fields_carried(self, document: SchemaDocument) -> None:
        model = build(document)

        pressure = model.find_messages(0x200)[0].get_signal("Pressure")
        assert pressure.is_signed
        assert pressure.byte_order is ByteOrder.BIG_ENDIAN
        assert pressure.start_bit == 0
        assert pressure.length_bits == 12

        rpm = model.find_messages(0x100)[0].get_signal("Rpm")
        assert rpm.unit == "rpm"
        assert rpm.signal_type == LinearType(multiplier=0.25, offset=0.0)

    def test_signal_types(self, document: SchemaDocument) -> None:
        engine = build(document).find_messages(0x100)[0]

        assert engine.get_signal("Running").signal_type.kind is SignalKind.BOOL
        gear = engine.get_signal("Gear").signal_type
        assert gear.kind is SignalKind.ENUM
        assert [value for value, _ in gear.entries] == [1, 2, 3]

    def test_counts(self, document: SchemaDocument) -> None:
        model = build(document)

        assert model.message_count == 4
        assert model.signal_count == 4

    def test_same_grouping_regardless_of_order(self, document: SchemaDocument) -> None:
        reversed_doc = dataclasses.replace(document, messages=list(reversed(document.messages)))

        first = build(document)
        second = build(reversed_doc)

        def grouping(model):
            return {ecu.name: sorted(m.frame_id for m in ecu.messages) for ecu in model.ecus}

        assert grouping(first) == grouping(second)

    def test_duplicate_ids_not_merged(self) -> None:
        document = SchemaDocument(messages=[
            _message(0x100, "FromA", "ECU_A"),
            _message(0x100, "FromB", "ECU_B"),
            _message(0x100, "AgainFromA", "ECU_A"),
        ])

        model = build(document)

        assert len(model.ecus) == 2
        assert [m.name for m in model.find_messages(0x100)] == ["FromA", "AgainFromA", "FromB"]

    def test_extended_id_passed_through(self) -> None:
        document = SchemaDocument(messages=[_message(0x98FF50E5, "Ext", "ECU_A")])

        assert build(document).ecus[0].messages[0].frame_id == 0x98FF50E5

    def test_empty_document(self) -> None:
        model = build(SchemaDocument())

        assert model.ecus == ()
        assert model.message_count == 0

    def test_model_is_immutable(self, document: SchemaDocument) -> None:
        model = build(document)

        with pytest.raises(dataclasses.FrozenInstanceError):
            model.ecus[0].name = "Other"  # type: ignore
        assert isinstance(model.ecus[0].messages, tuple)

    def test_document_not_modified(self, document: SchemaDocument) -> None:
        before = copy.deepcopy(document)
        build(document)

        assert document == before

    def test_no_transmitter_survives_copy(self) -> None:
        assert copy.deepcopy(NO_TRANSMITTER) is NO_TRANSMITTER
        assert NO_TRANSMITTER != "NO_TRANSMITTER"
