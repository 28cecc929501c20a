from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Importa os modelos para que sejam registrados com a Base
from app.models import (  # noqa: E402,F401
    user,
    client,
    lead,
    project,
    payment,
    team_member,
    team_member_payment,
    investment,
    email,
)
