from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

import eventually.commands as commands
from eventually.database import get_db
from eventually.schemas import TaskOut, TaskTree

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(db: Session = Depends(get_db)):
    return commands.get_all_tasks(db)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(task_data: dict = Body(...), db: Session = Depends(get_db)):
    return commands.create_task(db, task_data)


@router.get("/tree", response_model=list[TaskTree])
def task_tree(db: Session = Depends(get_db)):
    return commands.get_task_tree(db)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, task_data: dict = Body(...), db: Session = Depends(get_db)):
    return commands.update_task(db, task_id, task_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    commands.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/reorder", status_code=status.HTTP_204_NO_CONTENT)
def reorder_task(task_id: int, reorder_data: dict = Body(...), db: Session = Depends(get_db)):
    commands.reorder_task(db, task_id, reorder_data.get("new_position"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
