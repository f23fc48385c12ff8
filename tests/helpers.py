"""
Example transaction from EIP-155, shared by the test modules.
"""

EIP155_PRIVATE_KEY = "0x" + "46" * 32
EIP155_SENDER = "0x9d8A62f656a8d1615C1294fd71e9CFb3E4855A4F"
EIP155_SIGNING_DATA = (
    "0xec098504a817c800825208943535353535353535353535353535353535353535880de0"
    "b6b3a764000080018080"
)
EIP155_SIGNING_HASH = (
    "0xdaf5a779ae972f972197303d7b574746c7ef83eadac0f2791ad23db92e4c8e53"
)
EIP155_R = 0x28EF61340BD939BC2195FE537567866003E1A15D3C71FF63E1590620AA636276
EIP155_S = 0x67CBE9D8997F761AECB703304B3800CCF555C9F3DC64214B297FB1966A3B6D83
EIP155_SIGNED_TRANSACTION = (
    "0xf86c098504a817c800825208943535353535353535353535353535353535353535880de0"
    "b6b3a76400008025a028ef61340bd939bc2195fe537567866003e1a15d3c71ff63e15906"
    "20aa636276a067cbe9d8997f761aecb703304b3800ccf555c9f3dc64214b297fb1966a3b"
    "6d83"
)
