from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from clinic import manage
from clinic.models.admin import Admin
from clinic.models.appointment_status import AppointmentStatus


@pytest.fixture
def manage_db(db, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(manage, 'SessionLocal', sessionmaker(autocommit=False, autoflush=False, bind=db.get_bind()))
    monkeypatch.setattr(manage, 'engine', db.get_bind())
    return db


def test_mark_past_command(manage_db, make_doctor, make_patient, make_appointment, capsys) -> None:
    appointment = make_appointment(make_doctor(), make_patient(), datetime(2000, 1, 3, 9, 0))

    assert manage.main(['mark-past']) == 0
    assert 'Marked 1 appointment(s) as past.' in capsys.readouterr().out

    manage_db.refresh(appointment)
    assert appointment.status == AppointmentStatus.PAST


def test_create_admin_command(manage_db, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('CLINIC_ADMIN_PASSWORD', 'secret-pass')

    assert manage.main(['create-admin', 'root']) == 0
    assert manage.main(['create-admin', 'root']) == 1

    admin = manage_db.query(Admin).filter(Admin.username == 'root').one()
    assert admin.check_password('secret-pass')
