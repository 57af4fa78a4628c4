from app.infrastructure.database.models.user_model import UserModel
from app.infrastructure.database.models.refresh_token_model import RefreshTokenModel
from app.infrastructure.database.models.patient_model import PatientModel

__all__ = ["UserModel", "RefreshTokenModel", "PatientModel"]
