import re
from datetime import date, timedelta
from decimal import Decimal

import pytest

from atenas.domain.entities.beneficiary import Beneficiary, age_on, validate_birth_date, validate_phone
from atenas.domain.entities.bold_transaction import BoldTransaction, generate_order_id
from atenas.domain.entities.evaluation import (
    Evaluation, calculate_performance, calculate_bmi, calculate_waist_hip_ratio, technical_average,
)
from atenas.domain.entities.headquarters import Headquarters
from atenas.domain.entities.project import Project, funding_progress
from atenas.domain.entities.user import User, validate_password, validate_username
from atenas.domain.enums import BoldTransactionStatus, RoleName, HeadquartersStatus
from atenas.domain.value_objects.entity_ids import UserId, HeadquartersId, BeneficiaryId
from atenas.domain.value_objects.money import Money


def _user(roles):
    return User(id=UserId.generate(), email="a@b.co", hashed_password="x", roles=roles)


class TestRoles:

    def test_no_roles_falls_back_to_donator(self):
        user = _user([])
        assert user.primary_role == RoleName.DONATOR
        assert user.dashboard_path == "/donator"

    def test_admin_outranks_other_roles(self):
        user = _user([RoleName.ENTRENADOR, RoleName.ADMIN, RoleName.DIRECTOR])
        assert user.primary_role == RoleName.ADMIN
        assert user.dashboard_path == "/admin"

    def test_site_director_dashboard(self):
        assert _user([RoleName.DIRECTOR_SEDE, RoleName.DONATOR]).dashboard_path == "/director-sede"

    def test_profile_completion(self):
        user = _user([])
        assert not user.has_completed_profile
        user.update_profile(username="ana_g", first_name="Ana", last_name="Gómez")
        assert user.has_completed_profile

    def test_replace_roles_requires_one(self):
        with pytest.raises(ValueError):
            _user([RoleName.DONATOR]).replace_roles([])


class TestUserValidation:

    @pytest.mark.parametrize("username", ["ab", "a" * 21, "ana gomez", "ana-g"])
    def test_rejects_bad_usernames(self, username):
        with pytest.raises(ValueError):
            validate_username(username)

    @pytest.mark.parametrize("password", ["Short1", "alllowercase1", "NoDigitsHere"])
    def test_rejects_weak_passwords(self, password):
        with pytest.raises(ValueError):
            validate_password(password)

    def test_accepts_valid_password(self):
        assert validate_password("Secret123") == "Secret123"


class TestMoney:

    def test_bold_amount_rounds_half_up(self):
        assert Money(Decimal("1500.5")).to_bold_amount() == "1501"
        assert Money(Decimal("1500.49")).to_bold_amount() == "1500"

    def test_format_cop(self):
        assert Money(Decimal("1500000")).format_cop() == "$ 1.500.000"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            Money(Decimal("-1"))


class TestBoldTransaction:

    def test_order_id_format(self):
        order_id = generate_order_id("ATENAS")
        assert re.fullmatch(r"ATENAS-\d{13}-\d{1,6}", order_id)

    def test_order_ids_differ(self):
        assert len({generate_order_id() for _ in range(50)}) > 1

    def _pending(self):
        return BoldTransaction.create_pending(
            order_id="ATENAS-1-1", user_id=UserId.generate(), money=Money(Decimal("50000")), integrity_signature="sig"
        )

    def test_first_approval_reports_true(self):
        transaction = self._pending()
        assert transaction.apply_gateway_result(BoldTransactionStatus.APPROVED, "tx-1", "CARD", {}) is True
        assert transaction.is_final

    def test_final_state_is_not_reopened(self):
        transaction = self._pending()
        transaction.apply_gateway_result(BoldTransactionStatus.DECLINED, "tx-1", None, {})
        assert transaction.apply_gateway_result(BoldTransactionStatus.APPROVED, "tx-2", None, {}) is False
        assert transaction.status == BoldTransactionStatus.DECLINED

    def test_events_are_drained(self):
        transaction = self._pending()
        assert len(transaction.get_events()) == 1
        assert transaction.get_events() == []


class TestProject:

    def test_progress_is_capped(self):
        assert funding_progress(Decimal("3000"), Decimal("1000")) == 100

    def test_progress_rounds_half_up(self):
        assert funding_progress(Decimal("125"), Decimal("1000")) == 13

    def test_missing_goal_counts_as_one(self):
        assert funding_progress(Decimal("0"), None) == 0
        assert funding_progress(Decimal("5"), Decimal("0")) == 100

    def test_short_name_rejected(self):
        with pytest.raises(ValueError):
            Project.create(name="ab")

    def test_negative_goal_rejected(self):
        with pytest.raises(ValueError):
            Project.create(name="Becas", finance_goal=Decimal("-5"))

    def test_end_before_start_rejected(self):
        project = Project.create(name="Becas")
        with pytest.raises(ValueError):
            project.update(start_date=date(2024, 5, 1), end_date=date(2024, 4, 1))


class TestHeadquarters:

    def test_requires_address_and_city(self):
        with pytest.raises(ValueError, match="Nombre, dirección y ciudad son requeridos"):
            Headquarters.create(name="Sede", address=" ", city="Cali")

    def test_toggle_status(self):
        headquarters = Headquarters.create(name="Sede", address="Calle 1", city="Cali")
        assert headquarters.toggle_status() == HeadquartersStatus.INACTIVE
        assert headquarters.toggle_status() == HeadquartersStatus.ACTIVE


class TestBeneficiary:

    def _fields(self, **overrides):
        fields = {
            "first_name": "Luis",
            "last_name": "Pérez",
            "birth_date": date(date.today().year - 10, 1, 1),
            "category": "sub-12",
            "headquarters_id": HeadquartersId.generate(),
            "phone": "+57 (300) 123-4567",
        }
        fields.update(overrides)
        return fields

    def test_defaults(self):
        beneficiary = Beneficiary.create(**self._fields())
        assert beneficiary.status.value == "activo"
        assert beneficiary.registry_date == date.today()
        assert isinstance(beneficiary.id, BeneficiaryId)

    def test_age_seventeen_is_allowed(self):
        today = date(2024, 6, 15)
        assert validate_birth_date(date(2006, 6, 16), today) == date(2006, 6, 16)
        assert age_on(date(2006, 6, 16), today) == 17

    def test_age_eighteen_is_rejected(self):
        with pytest.raises(ValueError):
            validate_birth_date(date(2006, 6, 15), date(2024, 6, 15))

    def test_future_birth_date_rejected(self):
        with pytest.raises(ValueError):
            Beneficiary.create(**self._fields(birth_date=date.today() + timedelta(days=1)))

    def test_phone_pattern(self):
        with pytest.raises(ValueError):
            validate_phone("300-ABC")

    def test_text_limits(self):
        with pytest.raises(ValueError):
            Beneficiary.create(**self._fields(guardian="x" * 101))

    def test_percentages(self):
        with pytest.raises(ValueError):
            Beneficiary.create(**self._fields(attendance=101))

    def test_update_validates_present_fields_only(self):
        beneficiary = Beneficiary.create(**self._fields())
        beneficiary.update(observation="Zurdo", first_name=None)
        assert beneficiary.first_name == "Luis"
        with pytest.raises(ValueError):
            beneficiary.update(first_name="L")


class TestEvaluation:

    TECHNICAL = {"pase": 5, "recepcion": 4, "remate": 3, "regate": 4, "ubicacion_espacio_temporal": 4}

    def test_performance_maps_scale(self):
        # avg 4.0 -> (4 - 1) / 4 * 100 = 75
        assert calculate_performance(self.TECHNICAL) == 75

    def test_performance_is_clamped(self):
        assert calculate_performance({"pase": 9}) == 100
        assert calculate_performance({"pase": 0}) == 0

    def test_technical_average(self):
        assert technical_average(self.TECHNICAL) == 4.0

    def test_bmi_and_ratio(self):
        assert calculate_bmi(40, 150) == 17.78
        assert calculate_waist_hip_ratio(70, 90) == 0.78

    def test_requires_a_section(self):
        with pytest.raises(ValueError):
            Evaluation.create(beneficiary_id=BeneficiaryId.generate())

    def test_sex_from_anthropometric(self):
        evaluation = Evaluation.create(
            beneficiary_id=BeneficiaryId.generate(), anthropometric_detail={"genero": "F", "peso": 40, "talla": 150}
        )
        assert evaluation.sex == "F"
        assert evaluation.performance is None
        assert evaluation.bmi == 17.78
