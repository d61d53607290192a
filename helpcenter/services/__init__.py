"""
Help Center Backend — Services Layer
======================================

Business rules between routes (HTTP) and the database session.

Service Inventory:
    - provider_adapters: Google/GitHub profile → canonical (name, email)
    - OAuthService: authorization-code flow against the providers (Authlib)
    - IdentityService: find-or-create user by email
    - SessionPrincipalService: session token ↔ user id, deserialize to User
    - UserService, ReportService, ArticleService: the JSON API resources

Services are stateless singletons (SessionPrincipalService holds only its
store) and receive the request-scoped AsyncSession on every call.
"""
