import networkx as nx
import numpy as np

from network import SocialNetwork
from utils import to_digraph


def _stats(values) -> dict:
    if len(values) == 0:
        return {'mean': 0.0, 'std_dev': 0.0, 'count': 0}
    return {
        'mean': float(np.mean(values)),
        'std_dev': float(np.std(values)),
        'count': len(values)
    }


def follower_count_stats(network: SocialNetwork):
    """
    Mean and standard deviation of the number of followers per user.

    Self-follows are not counted, matching SocialNetwork.followers.

    Returns:
        dict: {'mean': float, 'std_dev': float, 'count': int}
    """
    adjacency = network.adjacency & ~np.eye(len(network), dtype=bool)
    return _stats(adjacency.sum(axis=0))


def following_count_stats(network: SocialNetwork):
    """Same as follower_count_stats, for the length of each user's follows list."""
    return _stats([len(user.follows) for user in network.records])


def mutual_pair_count(network: SocialNetwork) -> int:
    both = network.adjacency & network.adjacency.T
    return int(np.triu(both, k=1).sum())


def clustering_stats(network: SocialNetwork):
    graph = to_digraph(network).to_undirected()
    graph.remove_edges_from(nx.selfloop_edges(graph))
    clustering_coeffs = list(nx.clustering(graph).values())
    return _stats(clustering_coeffs)


def summarize(network: SocialNetwork) -> dict:
    followers = follower_count_stats(network)
    return {
        "users": len(network),
        "follow_edges": int(network.adjacency.sum()),
        "mutual_pairs": mutual_pair_count(network),
        "avg_followers": round(followers['mean'], 3),
        "avg_clustering": round(clustering_stats(network)['mean'], 3),
    }
