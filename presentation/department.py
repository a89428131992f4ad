from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import logger
from core.settings import settings
from database.database import DataBaseConnection, get_database
from domain.entities import DepartmentNode, EmployeeSort
from domain.exceptions import StoreError
from services.deletion import parse_delete_mode
from services.department_service import DepartmentService

from .dto import (
    DepartmentCreateRequest,
    DepartmentUpdateRequest,
    DepartmentResponse,
    DepartmentTreeResponse,
    EmployeeCreateRequest,
    EmployeeResponse,
    ErrorResponse,
)

# ========== ROUTER ==========
router = APIRouter(
    prefix='/departments',
    tags=['department'],
    responses={
        400: {'model': ErrorResponse, 'description': 'Неверные параметры'},
        404: {'model': ErrorResponse, 'description': 'Подразделение не найдено'},
    },
)


# ========== DEPENDENCIES ==========
async def get_session(db: DataBaseConnection = Depends(get_database)):
    """Одна транзакция на запрос: commit при успехе, rollback при любом исключении (и отмене)."""
    async with db.get_session() as session:
        try:
            async with session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f'Транзакция отменена из-за ошибки БД: {e}')
            raise StoreError('Ошибка базы данных') from e


# scope='function': commit выполняется до отправки ответа, ошибка commit даёт 500
async def get_service(
    session: AsyncSession = Depends(get_session, scope='function'),
) -> DepartmentService:
    return DepartmentService(session)


def to_tree_response(node: DepartmentNode, depth: int, level: int = 0) -> DepartmentTreeResponse:
    """Рекурсивный рендер; на уровне depth дети не выводятся. Пустые списки не выставляются."""
    extra = {}
    if node.employees:
        extra['employees'] = [EmployeeResponse.model_validate(e) for e in node.employees]
    if level < depth and node.children:
        extra['children'] = [to_tree_response(c, depth, level + 1) for c in node.children]
    return DepartmentTreeResponse(
        id=node.id,
        name=node.name,
        parent_id=node.parent_id,
        created_at=node.created_at,
        **extra,
    )


# ========== ENDPOINTS ==========

@router.post(
    '/',
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Создание нового подразделения',
)
async def create_department(
    request: DepartmentCreateRequest,
    service: DepartmentService = Depends(get_service),
) -> DepartmentResponse:
    saved = await service.create_department(request.name, request.parent_id)
    return DepartmentResponse.model_validate(saved)


@router.post(
    '/{id}/employees/',
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Создание нового сотрудника в подразделении',
)
async def create_employee(
    id: int,
    request: EmployeeCreateRequest,
    service: DepartmentService = Depends(get_service),
) -> EmployeeResponse:
    saved = await service.create_employee(
        department_id=id,
        full_name=request.full_name,
        position=request.position,
        hired_at=request.hired_at,
    )
    return EmployeeResponse.model_validate(saved)


@router.get(
    '/{id}/employees/',
    response_model=list[EmployeeResponse],
    status_code=status.HTTP_200_OK,
    summary='Сотрудники подразделения (без поддерева)',
)
async def list_employees(
    id: int,
    sort_employees: EmployeeSort = Query(default=EmployeeSort.FULL_NAME),
    service: DepartmentService = Depends(get_service),
) -> list[EmployeeResponse]:
    employees = await service.list_employees(id, sort_employees)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    '/{id}',
    response_model=DepartmentTreeResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary='Получить подразделение (детали + сотрудники + поддерево)',
)
async def get_department(
    id: int,
    depth: int = Query(
        default=settings.DEFAULT_TREE_DEPTH,
        ge=1,
        le=settings.MAX_TREE_DEPTH,
        description=f'Глубина вложенных подразделений (1–{settings.MAX_TREE_DEPTH})',
    ),
    include_employees: bool = Query(default=True),
    sort_employees: EmployeeSort = Query(default=EmployeeSort.FULL_NAME),
    service: DepartmentService = Depends(get_service),
) -> DepartmentTreeResponse:
    tree = await service.get_tree(id, depth, include_employees, sort_employees)
    return to_tree_response(tree, depth)


@router.patch(
    '/{id}',
    response_model=DepartmentResponse,
    status_code=status.HTTP_200_OK,
    summary='Переименовать или переместить подразделение',
    responses={409: {'model': ErrorResponse, 'description': 'Перемещение создаёт цикл'}},
)
async def update_department(
    id: int,
    request: DepartmentUpdateRequest,
    service: DepartmentService = Depends(get_service),
) -> DepartmentResponse:
    # parent_id: null -> в корень, отсутствие поля -> без изменений
    move = {'parent_id': request.parent_id} if 'parent_id' in request.model_fields_set else {}
    updated = await service.update_department(id, name=request.name, **move)
    return DepartmentResponse.model_validate(updated)


@router.delete(
    '/{id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Удаление подразделения (cascade или reassign)',
    responses={
        204: {'description': 'Подразделение успешно удалено'},
        409: {'model': ErrorResponse, 'description': 'Целевое подразделение внутри удаляемого поддерева'},
    },
)
async def delete_department(
    id: int,
    mode: str = Query(
        default='cascade',
        description='cascade — удалить всё поддерево; reassign — перевести детей и сотрудников',
    ),
    reassign_to_department_id: int | None = Query(
        default=None,
        description='ID подразделения-получателя (обязателен при mode=reassign)',
    ),
    service: DepartmentService = Depends(get_service),
) -> Response:
    delete_mode = parse_delete_mode(mode, reassign_to_department_id)
    await service.delete_department(id, delete_mode)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
