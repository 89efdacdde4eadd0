"""Infrastructure ORM Models"""

from .user_model import UserModel, RoleModel, UserRoleModel
from .headquarters_model import HeadquartersModel, HeadquartersProjectModel
from .project_model import ProjectModel, DonationReportModel
from .beneficiary_model import BeneficiaryModel, BeneficiaryProjectModel, EvaluationModel, BeneficiaryEvaluationModel
from .donation_model import DonationModel, BoldTransactionModel
from .content_model import TestimonialModel, GalleryItemModel, SiteContentModel
from .password_reset_token_model import PasswordResetTokenModel

__all__ = [
    'UserModel',
    'RoleModel',
    'UserRoleModel',
    'HeadquartersModel',
    'HeadquartersProjectModel',
    'ProjectModel',
    'DonationReportModel',
    'BeneficiaryModel',
    'BeneficiaryProjectModel',
    'EvaluationModel',
    'BeneficiaryEvaluationModel',
    'DonationModel',
    'BoldTransactionModel',
    'TestimonialModel',
    'GalleryItemModel',
    'SiteContentModel',
    'PasswordResetTokenModel',
]
