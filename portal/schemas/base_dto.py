from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    '''
    Base for every report / request shape.

    Python attributes are snake_case; the wire names are the camelCase
    aliases the admin UI already consumes. Dump with ``by_alias=True``.
    '''
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
