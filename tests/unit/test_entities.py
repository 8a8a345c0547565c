import pytest

from swapcycles.core.entities import Section, Student
from swapcycles.core.exceptions import ValidationError
from swapcycles.persistence import StudentRegistry, SectionRegistry
from swapcycles.core.exceptions import DuplicateEntityError, ResourceNotFoundError


@pytest.mark.unit
def test_student_preferences_keep_order_and_duplicates():
    student = Student("A")
    student.add_preference("math")
    student.add_preference("science")
    student.add_preference("math")

    assert student.preferences == ["math", "science", "math"]
    assert student.prefers("science")
    assert not student.prefers("history")
    assert not student.prefers(None)
    assert student.version == 4


@pytest.mark.unit
def test_student_preferences_are_copied():
    student = Student("A")
    student.preferences.append("math")
    assert student.preferences == []


@pytest.mark.unit
@pytest.mark.parametrize("bad", ["", "   ", None, 3])
def test_invalid_ids_rejected(bad):
    with pytest.raises(ValidationError):
        Student(bad)
    with pytest.raises(ValidationError):
        Section(bad)


@pytest.mark.unit
def test_empty_preference_rejected():
    with pytest.raises(ValidationError):
        Student("A").add_preference("")


@pytest.mark.unit
def test_section_membership():
    section = Section("history")
    section.add_student("A")
    section.add_student("A")
    section.add_student("B")

    assert section.students == {"A", "B"}
    assert section.enrolled_count == 2
    assert section.has_student("B")
    assert section.version == 3
    assert section.to_dict()["students"] == ["A", "B"]


@pytest.mark.unit
def test_registry_iterates_in_id_order():
    registry = StudentRegistry()
    for name in ("S", "A", "P"):
        registry.add(Student(name))

    assert registry.ids() == ["A", "P", "S"]
    assert [s.id for s in registry] == ["A", "P", "S"]
    assert "P" in registry
    assert len(registry) == 3


@pytest.mark.unit
def test_registry_lookup():
    registry = SectionRegistry()
    registry.add(Section("math"))

    assert registry.find_by_id("math").id == "math"
    assert registry.find_by_id("art") is None
    with pytest.raises(ResourceNotFoundError):
        registry.get("art")
    with pytest.raises(DuplicateEntityError):
        registry.add(Section("math"))


@pytest.mark.unit
def test_registry_save_replaces():
    registry = StudentRegistry()
    registry.add(Student("A"))
    replacement = Student("A")
    registry.save(replacement)
    assert registry.get("A") is replacement


@pytest.mark.unit
def test_find_sections_of_student():
    registry = SectionRegistry()
    for name in ("math", "art", "history"):
        registry.add(Section(name))
    registry.get("math").add_student("A")
    registry.get("art").add_student("A")

    assert [s.id for s in registry.find_sections_of("A")] == ["art", "math"]
    assert registry.find_sections_of("B") == []


@pytest.mark.unit
def test_student_to_dict():
    student = Student("A")
    student.add_preference("math")
    assert student.to_dict() == {'id': "A", 'version': 2, 'name': "A", 'preferences': ["math"]}
