from database.repositories.department_repo import DepartmentRepo
from domain.exceptions import CycleError


class CycleChecker:
    """Не даёт переместить подразделение в самого себя или в собственное поддерево."""

    def __init__(self, repo: DepartmentRepo):
        self.repo = repo

    async def check(self, department_id: int, new_parent_id: int | None) -> None:
        if new_parent_id is None:
            return
        if new_parent_id == department_id:
            raise CycleError('Подразделение не может быть родителем самого себя')
        if new_parent_id in await self.subtree_ids(department_id):
            raise CycleError('Нельзя переместить подразделение внутрь собственного поддерева')

    async def subtree_ids(self, root_id: int) -> set[int]:
        """BFS по уровням от прямых потомков root_id; каждый узел посещается один раз."""
        visited = {root_id}
        frontier = [root_id]
        while frontier:
            children = await self.repo.list_child_ids(frontier)
            frontier = [c for c in children if c not in visited]
            visited.update(frontier)
        visited.discard(root_id)
        return visited
