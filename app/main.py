from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import auth, profile, clients, leads, projects, payments, team, investments, dashboard, invoices, email, exports
from app.db.session import create_tables
from app.core.config import settings
from app.core.errors import DataAccessError, RequestCancelled, data_access_error_handler, request_cancelled_handler
from app.core.logging import init_sentry, setup_logging
from app.middleware.logging import AccessLoggingMiddleware
from app.helpers.getters import isTestMode

# Initialize logging and error tracking
setup_logging()
init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests create their own schema on a throwaway database
    if not isTestMode():
        await create_tables()
    yield


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="""
## Authentication

This API uses OAuth2 with the password flow.

1. **Register** with `POST /api/auth/register`, or
2. Click **Authorize** and enter your **email** in the `username` field and your password, or
3. Call `POST /api/auth/login` with `{"email": "...", "password": "..."}` and paste the returned `access_token` into **Authorize**.

Logging out (`POST /api/auth/logout`) invalidates every token issued before.

## Accounts

- **Freelancer / Business**: clients, projects, payments, invoices, dashboard, exports
- **Agency**: all of the above plus team members, team payments, investments and email automation
- Follow-up reminders and payment follow-ups are part of the **pro** and **agency** plans
    """,
    version="1.0.0",
    lifespan=lifespan,
)

origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(AccessLoggingMiddleware, enabled=not isTestMode())

app.add_exception_handler(DataAccessError, data_access_error_handler)
app.add_exception_handler(RequestCancelled, request_cancelled_handler)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(leads.router, prefix="/api/leads", tags=["leads"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(team.router, prefix="/api/team", tags=["team"])
app.include_router(investments.router, prefix="/api/investments", tags=["investments"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(invoices.router, prefix="/api/invoices", tags=["invoices"])
app.include_router(email.router, prefix="/api/email", tags=["email"])
app.include_router(exports.router, prefix="/api/exports", tags=["exports"])

@app.get("/")
def root():
    return {"message": f"Welcome to the {settings.APP_NAME} API. See /docs for the OpenAPI documentation."}

@app.get("/health")
def health():
    return {"status": "ok"}
