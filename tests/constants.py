from domain.base_types import ClientId

CLIENT_A = ClientId(1)
CLIENT_B = ClientId(2)

HEADER = "type, client, tx, amount"
