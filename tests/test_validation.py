"""
Тесты правил нормализации и проверки полей.
"""
import pytest
from hypothesis import given, strategies as st

from domain.entities import Department, Employee
from domain.exceptions import ValidationError
from services.department_service import DepartmentService
from services.validation import clean_text, validate_department, validate_employee


class TestCleanText:
    @given(value=st.text(max_size=260))
    def test_result_is_trimmed_input_within_bounds(self, value: str):
        stripped = value.strip()
        if not stripped or len(stripped) > 200:
            with pytest.raises(ValidationError):
                clean_text(value, 'name')
        else:
            assert clean_text(value, 'name') == stripped

    def test_surrounding_whitespace_does_not_count_towards_length(self):
        value = '   ' + 'x' * 200 + '\t\n'
        assert clean_text(value, 'name') == 'x' * 200

    def test_none_is_rejected(self):
        with pytest.raises(ValidationError, match='name'):
            clean_text(None, 'name')


class TestValidateEmployee:
    def test_fields_are_trimmed_in_place(self):
        employee = Employee(department_id=1, full_name='  Alice Smith ', position=' Engineer', hired_at=None)
        validate_employee(employee)
        assert employee.full_name == 'Alice Smith'
        assert employee.position == 'Engineer'

    def test_blank_position_is_rejected(self):
        employee = Employee(department_id=1, full_name='Alice', position='   ', hired_at=None)
        with pytest.raises(ValidationError, match='position'):
            validate_employee(employee)


class TestValidateDepartment:
    async def test_duplicate_name_under_same_parent(self, session):
        service = DepartmentService(session)
        root = await service.create_department('Eng')
        await service.create_department('Backend', root.id)

        with pytest.raises(ValidationError):
            await validate_department(service.departments, Department(name=' Backend ', parent_id=root.id))

    async def test_duplicate_name_at_root_scope(self, session):
        service = DepartmentService(session)
        await service.create_department('Eng')

        with pytest.raises(ValidationError):
            await service.create_department('Eng')

    async def test_same_name_under_different_parents(self, session):
        service = DepartmentService(session)
        eng = await service.create_department('Eng')
        ops = await service.create_department('Ops')

        first = await service.create_department('Platform', eng.id)
        second = await service.create_department('Platform', ops.id)
        assert first.id != second.id

    async def test_comparison_is_case_sensitive(self, session):
        service = DepartmentService(session)
        await service.create_department('Eng')
        other = await service.create_department('eng')
        assert other.name == 'eng'

    async def test_own_name_is_excluded_on_update(self, session):
        service = DepartmentService(session)
        dept = await service.create_department('Eng')

        department = await service.departments.get(dept.id)
        await validate_department(service.departments, department)
        assert department.name == 'Eng'
