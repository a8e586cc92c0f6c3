"""Persisted record schemas (SettingsRecord, FileRecord)."""

from pydantic import BaseModel, ConfigDict, Field


class SettingsRecord(BaseModel):
    """
    The singleton settings document: download path and the encoded keypair.
    """
    model_config = ConfigDict(populate_by_name=True)

    download_path: str = Field(alias="downloadpath")
    private_key: str = Field(alias="privateKey")
    public_key: str = Field(alias="publicKey")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class FileRecord(BaseModel):
    """
    Metadata for one ingested file as stored in the ledger.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(ge=0)
    cid: str
    signature: str
