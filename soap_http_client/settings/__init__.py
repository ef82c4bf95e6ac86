from soap_http_client.settings.main import ClientSettings

__all__ = ["ClientSettings"]
