from .bhattacharyya import bhattacharyya_normal, bhattacharyya_uniform, uniform_log_vol_overlap
from .kullback_leibler import kl_normal, kl_uniform
from .measures import Bhattacharyya, KullbackLeibler, bhattacharyya, kullback_leibler
from .sampling import bhattacharyya_sample, kl_sample
