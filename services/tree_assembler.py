from database.repositories.department_repo import DepartmentRepo
from database.repositories.employee_repo import EmployeeRepo
from domain.entities import DepartmentNode, EmployeeSort
from domain.exceptions import NotFoundError


class TreeAssembler:
    """
    Собирает поддерево подразделения ограниченной глубины.

    Подразделения грузятся по уровням (один запрос на уровень), сотрудники —
    одним запросом на всё загруженное множество. Узлы хранятся в словаре по id
    и связываются через него, поэтому рекурсия при рендере ограничена depth.
    """

    def __init__(self, departments: DepartmentRepo, employees: EmployeeRepo):
        self.departments = departments
        self.employees = employees

    async def assemble(
        self,
        root_id: int,
        depth: int,
        include_employees: bool = True,
        sort: EmployeeSort = EmployeeSort.FULL_NAME,
    ) -> DepartmentNode:
        root = await self.departments.get_node(root_id)
        if root is None:
            raise NotFoundError('Подразделение не найдено')

        nodes: dict[int, DepartmentNode] = {root.id: root}
        level_ids = [root.id]
        for _ in range(depth):
            children = await self.departments.list_children(level_ids)
            if not children:
                break
            for child in children:
                nodes[child.id] = child
            level_ids = [child.id for child in children]

        # dict сохраняет порядок вставки, т.е. порядок BFS-загрузки
        for node in nodes.values():
            parent = nodes.get(node.parent_id) if node.parent_id is not None else None
            if parent is not None and node is not root:
                parent.children.append(node)

        if include_employees:
            for employee in await self.employees.list_by_departments(nodes.keys(), sort):
                nodes[employee.department_id].employees.append(employee)

        return root
