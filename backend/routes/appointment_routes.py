import logging
from datetime import date, datetime, time

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_db, require_admin
from backend.auth.sessions import AdminSession
from backend.core.errors import ApiError, internal_error
from backend.models.appointment import Appointment
from backend.routes.pages import page_response
from backend.routes.request_data import read_request_data

router = APIRouter(tags=['appointments'])
api_router = APIRouter(tags=['admin-api'])

logger = logging.getLogger(__name__)

SUCCESS_PAGE_URL = '/success.html'
MISSING_FIELDS_MESSAGE = 'All fields are required.'
INVALID_SCHEDULE_MESSAGE = 'Invalid appointment date or time.'


class AppointmentSubmission(BaseModel):
    full_name: str
    phone: str
    category: str
    service: str
    date: date
    time: time

    @field_validator('full_name', 'phone', 'category', 'service', mode='before')
    @classmethod
    def validate_required_text(cls, value: str | None) -> str:
        normalized = (value or '').strip()
        if not normalized:
            raise ValueError(MISSING_FIELDS_MESSAGE)
        return normalized

    @field_validator('date', 'time', mode='before')
    @classmethod
    def validate_required_schedule(cls, value):
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ValueError(MISSING_FIELDS_MESSAGE)
        return value


class AppointmentResponse(BaseModel):
    id: int
    full_name: str
    phone: str
    category: str
    service: str
    appointment_date: date
    appointment_time: time
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def parse_submission(
    full_name: str,
    phone: str,
    category: str,
    service: str,
    appointment_date: str,
    appointment_time: str,
) -> AppointmentSubmission:
    return AppointmentSubmission(
        full_name=full_name,
        phone=phone,
        category=category,
        service=service,
        date=appointment_date,
        time=appointment_time,
    )


def submission_error_message(exc: ValidationError) -> str:
    for error in exc.errors():
        if MISSING_FIELDS_MESSAGE in error.get('msg', ''):
            return MISSING_FIELDS_MESSAGE
    return INVALID_SCHEDULE_MESSAGE


@router.get('/')
def home_page():
    return page_response('home.html')


@router.get('/success.html')
def success_page():
    return page_response('success.html')


@router.post('/submit-appointment')
def submit_appointment(
    data: dict[str, str] = Depends(read_request_data),
    db: Session = Depends(get_db),
):
    try:
        submission = parse_submission(
            data.get('fullName', ''),
            data.get('phone', ''),
            data.get('category', ''),
            data.get('service', ''),
            data.get('date', ''),
            data.get('time', ''),
        )
    except ValidationError as exc:
        return PlainTextResponse(submission_error_message(exc), status_code=status.HTTP_400_BAD_REQUEST)

    try:
        appointment = Appointment(
            full_name=submission.full_name,
            phone=submission.phone,
            category=submission.category,
            service=submission.service,
            appointment_date=submission.date,
            appointment_time=submission.time,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Error saving appointment')
        return PlainTextResponse('Internal Server Error', status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(
        'New appointment booked: id=%s service=%s date=%s time=%s',
        appointment.id,
        appointment.service,
        appointment.appointment_date,
        appointment.appointment_time,
    )
    return RedirectResponse(url=SUCCESS_PAGE_URL, status_code=status.HTTP_302_FOUND)


@api_router.get('/appointments', response_model=list[AppointmentResponse])
def list_appointments(
    _admin: AdminSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return db.query(Appointment).order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.asc(),
        ).all()
    except SQLAlchemyError as exc:
        logger.exception('Error fetching appointments')
        raise internal_error() from exc


@api_router.post('/appointments/reset-all', response_model=MessageResponse)
def reset_all_appointments(
    admin: AdminSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        deleted = db.query(Appointment).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error resetting appointments')
        raise internal_error() from exc

    logger.info('Admin %s cleared %s appointments', admin.admin_id, deleted)
    return MessageResponse(message='All appointments have been cleared successfully.')


@api_router.delete('/appointments/{appointment_id}', response_model=MessageResponse)
def delete_appointment(
    appointment_id: int,
    admin: AdminSession = Depends(require_admin),
    db: Session = Depends(get_db),
):
    logger.info('Admin %s attempting to delete appointment ID: %s', admin.admin_id, appointment_id)

    try:
        deleted = db.query(Appointment).filter(Appointment.id == appointment_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error deleting appointment')
        raise internal_error() from exc

    if deleted == 0:
        raise ApiError(status.HTTP_404_NOT_FOUND, 'Appointment not found.')

    return MessageResponse(message='Appointment deleted successfully.')
