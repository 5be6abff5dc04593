from .settings import HateoasSettings, settings
