import networkx as nx

from network import SocialNetwork


def to_digraph(network: SocialNetwork) -> nx.DiGraph:
    """Export a social network into a NetworkX directed graph.

    Edges represent follow relationships: follower -> followed user.

    Node attributes:
        - name: Display name
        - location: Location, empty if unknown
        - pic_url: Profile picture url

    Args:
        network: A built SocialNetwork.

    Returns:
        A directed graph with user IDs as nodes.
    """
    G = nx.DiGraph()

    for user in network.records:
        G.add_node(
            user.id,
            name=user.name,
            location=user.location,
            pic_url=user.pic_url,
        )

    for user in network.records:
        for followed_id in user.follows:
            G.add_edge(user.id, followed_id)

    return G
