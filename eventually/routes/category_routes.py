from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

import eventually.commands as commands
from eventually.database import get_db
from eventually.schemas import CategoryOut

router = APIRouter(prefix="/api/v1/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return commands.get_all_categories(db)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(category_data: dict = Body(...), db: Session = Depends(get_db)):
    return commands.create_category(db, category_data.get("name"), category_data.get("color"))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, category_data: dict = Body(...), db: Session = Depends(get_db)):
    return commands.update_category(db, category_id, category_data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    commands.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
