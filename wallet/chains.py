from enum import Enum

from core.exceptions import UnsupportedNetworkException
from wallet.entities import BlockExplorer, ChainDescriptor, Currency


EVM_NAMESPACE = "eip155"
ETHERLINK_IMAGE_URL = "https://etherlink.com/opengraph-image.png?4dd162b94a289c06"


class NetworkType(str, Enum):
    """Network identifiers accepted in configuration."""
    TESTNET = "testnet"
    MAINNET = "mainnet"


ETHERLINK_TESTNET = ChainDescriptor(
    chain_namespace=EVM_NAMESPACE,
    chain_id="128123",
    name="Etherlink Testnet",
    native_currency=Currency(name="Tez", symbol="XTZ", decimals=6),
    block_explorer=BlockExplorer(name="Explorer", url="https://testnet.explorer.etherlink.com/"),
    rpc_url="https://node.ghostnet.etherlink.com",
    is_testnet=True,
    image_url=ETHERLINK_IMAGE_URL,
    short_id="etherlinkTestnet"
)

ETHERLINK_MAINNET = ChainDescriptor(
    chain_namespace=EVM_NAMESPACE,
    chain_id="42793",
    name="Etherlink Mainnet",
    native_currency=Currency(name="Tez", symbol="XTZ", decimals=6),
    block_explorer=BlockExplorer(name="Explorer", url="https://mainnet.explorer.etherlink.com/"),
    rpc_url="https://node.mainnet.etherlink.com",
    is_testnet=False,
    image_url=ETHERLINK_IMAGE_URL,
    short_id="etherlink"
)

CHAINS = {
    NetworkType.TESTNET: ETHERLINK_TESTNET,
    NetworkType.MAINNET: ETHERLINK_MAINNET,
}


def select_chain(network: NetworkType | str) -> ChainDescriptor:
    """
    Resolve a configured network identifier to its chain descriptor.

    Parameters
    ----------
    network : NetworkType | str
        Network identifier

    Returns
    -------
    ChainDescriptor
        Descriptor of the matching Etherlink chain

    Raises
    ------
    UnsupportedNetworkException
        If the identifier is neither testnet nor mainnet
    """
    try:
        return CHAINS[NetworkType(network)]
    except ValueError:
        raise UnsupportedNetworkException(
            f"Network {network} is not supported in wallet connect"
        ) from None


def supported_chains(selected: ChainDescriptor, register_all: bool = False) -> list[ChainDescriptor]:
    """Chain set registered with the SDK: the selected chain first, optionally every chain."""
    if not register_all:
        return [selected]
    return [selected] + [chain for chain in CHAINS.values() if chain != selected]
