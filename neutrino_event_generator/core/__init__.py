"""
事件生成核心模块

该子包包含事件生成的核心功能模块：
- constants: 数值常数、调试标志和抽样统计
- data_classes: 数据结构定义（Particle, Event, Intersection）
- geometry: 体积与表面几何、射线求交
- acceptance: 投影面积与接受度
- sampling: 方向分布与通量加权射线抽样
- distributions: 能量、粒子类型等标量分布
- particle_types: 粒子类型代码与形状分类
- replay: 预计算相互作用表的读取与拼接
- injectors: 注入器（体积、表面、回放）
- simulation: 批量事件生成
- io_utils: 输出工具
"""

# 常数
from .constants import (
    DEBUG,
    REJECTION_STATS,
    reset_rejection_stats,
    print_rejection_stats,
)

# 数据类
from .data_classes import (
    Intersection,
    Particle,
    Event,
)

# 几何
from .geometry import (
    Volume,
    Cylinder,
    Cuboid,
    Sphere,
    FixedPoint,
    Surface,
    CylinderSurface,
    SphereSurface,
    point_in_volume,
    get_volume,
    sample_volume,
    sample_surface,
    as_surface,
    get_intersection,
    chord_length,
    surface_normal,
    is_volume,
    is_surface,
    sph_to_cart,
    cart_to_sph,
    build_orthonormal_frame,
)

# 投影面积与接受度
from .acceptance import (
    projected_area,
    maximum_proj_area,
    acceptance,
)

# 抽样
from .sampling import (
    RejectionSamplingError,
    AngularDistribution,
    HalfSphereAngularDistribution,
    UniformAngularDistribution,
    LowerHalfSphere,
    ConeAngularDistribution,
    sample_flux_cos_theta,
    sample_uniform_ray,
)

# 标量分布
from .distributions import (
    make_rng,
    FixedValue,
    PowerLawDistribution,
    CategoricalDistribution,
)

# 粒子类型
from .particle_types import (
    ParticleType,
    ParticleShape,
    is_neutrino,
    particle_shape,
)

# 回放数据
from .replay import (
    build_replay_table,
    filter_starting_events,
    read_replay_groups,
    write_replay_groups,
    load_replay_table,
)

# 注入器
from .injectors import (
    Injector,
    InjectorExhaustedError,
    VolumeInjector,
    SurfaceInjector,
    LIInjector,
)

# 模拟
from .simulation import generate_events

# IO工具
from .io_utils import (
    export_events_to_csv,
    events_to_dataframe,
)
