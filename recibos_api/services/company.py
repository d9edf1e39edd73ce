from dataclasses import dataclass


@dataclass(frozen=True)
class CompanyInfo:
    """Issuer printed on every receipt. Built once at start-up."""
    name: str
    cnpj: str
    city: str

    @classmethod
    def from_config(cls, config) -> "CompanyInfo":
        return cls(
            name=config["COMPANY_NAME"],
            cnpj=config["COMPANY_CNPJ"],
            city=config["COMPANY_CITY"],
        )
