# -*- coding: utf-8 -*-
"""
FastAPI routes for the key/value settings store.
"""
from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ccldi.database import get_db
from ccldi.models.setting import Setting
from ccldi.schemas.setting import SettingRead, SettingUpdate, SettingValue

router = APIRouter(
    tags=["Settings"],
    responses={404: {"description": "Setting not found"}},
)

@router.get("", response_model=Dict[str, SettingValue])
def read_settings(db: Session = Depends(get_db)):
    """
    Returns every setting as a key -> {value, description, updated_at} map.
    """
    settings = db.query(Setting).order_by(Setting.key).all()
    return {s.key: s for s in settings}

@router.get("/{key}", response_model=SettingRead)
def read_setting(key: str, db: Session = Depends(get_db)):
    db_setting = db.query(Setting).filter(Setting.key == key).first()
    if db_setting is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")
    return db_setting

@router.put("/{key}", response_model=SettingRead)
def update_setting(key: str, setting: SettingUpdate, db: Session = Depends(get_db)):
    """
    Updates the value of an existing setting; unknown keys are not created.
    """
    db_setting = db.query(Setting).filter(Setting.key == key).first()
    if db_setting is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")

    db_setting.value = setting.value
    db.commit()
    db.refresh(db_setting)
    return db_setting
