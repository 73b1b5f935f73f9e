"""
task_tree.py — Task forest assembly
Turns the flat, position-ordered task list into nested TaskTree nodes.

Nodes live in a working index keyed by id and are popped out of it as they
get attached, so each task lands in exactly one place. That also defuses
parent cycles: a node already taken cannot be attached again further down.
"""

from collections.abc import Iterable

from eventually.schemas import TaskOut, TaskTree


def build_task_tree(tasks: Iterable[TaskOut]) -> list[TaskTree]:
    """Build the forest for an ordered task list.

    Roots are tasks with no parent or whose parent is not in the input.
    Children keep the input order. Tasks stranded in a parent cycle with no
    root above them are promoted to roots, so every input task appears once.
    """
    order: list[int] = []
    nodes: dict[int, TaskTree] = {}
    for task in tasks:
        data = TaskOut.model_validate(task).model_dump()
        data.pop("subtasks", None)
        nodes[data["id"]] = TaskTree(**data)
        order.append(data["id"])

    children: dict[int, list[int]] = {}
    for task_id in order:
        parent_id = nodes[task_id].parent_id
        if parent_id is not None:
            children.setdefault(parent_id, []).append(task_id)

    roots = [
        task_id for task_id in order
        if nodes[task_id].parent_id is None or nodes[task_id].parent_id not in nodes
    ]

    forest = [_detach(root_id, nodes, children) for root_id in roots]

    # Whatever is left sits on a cycle nobody reached from a real root.
    for task_id in order:
        if task_id in nodes:
            forest.append(_detach(task_id, nodes, children))

    return forest


def _detach(task_id: int, nodes: dict[int, TaskTree], children: dict[int, list[int]]) -> TaskTree:
    root = nodes.pop(task_id)
    stack = [root]
    while stack:
        node = stack.pop()
        for child_id in children.get(node.id, ()):
            child = nodes.pop(child_id, None)
            if child is None:
                continue
            node.subtasks.append(child)
            stack.append(child)
    return root
