from pydantic import BaseModel, Field


class WikiConfig(BaseModel):
    """
    One configured wiki. display_name is the stable external identifier:
    it labels the menu section and is the only argument of open_all.
    """

    display_name: str = Field(alias="displayName")
    api_url: str = Field(alias="apiUrl")
    index_url: str = Field(alias="indexUrl")
    username: str
    watchlist_token: str = Field(alias="watchlistToken")

    class Config:
        frozen = True
        populate_by_name = True

    def diff_url(self, pageid: int, old_revid: int) -> str:
        return f"{self.index_url}?pageid={pageid}&diff=next&oldid={old_revid}"


class Settings(BaseModel):
    wikis: list[WikiConfig]

    def find_wiki(self, display_name: str) -> WikiConfig | None:
        for wiki in self.wikis:
            if wiki.display_name == display_name:
                return wiki
        return None
