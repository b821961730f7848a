from drf_spectacular.extensions import OpenApiAuthenticationExtension


class TenantContextAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "vx_core.iam.auth.TenantContextAuthentication"
    name = "TenantBearerJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Clinic access token via `Authorization: Bearer <token>`. "
                "The tenant comes from the request host subdomain."
            ),
        }


class ParentTokenAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "vx_core.parents.auth.ParentTokenAuthentication"
    name = "ParentBearerJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Parent-portal token from /api/v1/parent/auth/login/.",
        }
