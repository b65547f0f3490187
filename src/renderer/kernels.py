# renderer/kernels.py
from numba import njit, prange

@njit
def cross(a0, a1, a2, b0, b1, b2):
    return (a1 * b2 - a2 * b1,
            a2 * b0 - a0 * b2,
            a0 * b1 - a1 * b0)

@njit
def dot(a0, a1, a2, b0, b1, b2):
    return a0 * b0 + a1 * b1 + a2 * b2

@njit(parallel=True)
def rasterize_kernel(vertices, colors, buffer, width, x0, x1, y0, y1,
                     determinant_epsilon, barycentric_epsilon, min_distance,
                     cull_backfaces, out_mask):
    """
    Shade every covered pixel in the window [x0, x1) x [y0, y1).

    vertices and colors are (3, 3) float64 arrays, buffer is the flat
    (width * height, 3) framebuffer storage. Rows are independent and run
    in parallel. Covered pixels are flagged in out_mask, a flat bool array
    the size of the framebuffer.
    """
    # Plane edges and the ray-independent part of the determinant
    ux = vertices[1, 0] - vertices[0, 0]
    uy = vertices[1, 1] - vertices[0, 1]
    uz = vertices[1, 2] - vertices[0, 2]
    vx = vertices[2, 0] - vertices[0, 0]
    vy = vertices[2, 1] - vertices[0, 1]
    vz = vertices[2, 2] - vertices[0, 2]

    # Ray direction is +z for every pixel
    nx, ny, nz = cross(0.0, 0.0, 1.0, vx, vy, vz)
    a = dot(ux, uy, uz, nx, ny, nz)

    if cull_backfaces:
        facing = a > determinant_epsilon
    else:
        facing = abs(a) > determinant_epsilon
    if not facing:
        return

    for y in prange(y0, y1):
        for x in range(x0, x1):
            sx = x - vertices[0, 0]
            sy = y - vertices[0, 1]
            sz = 0.0 - vertices[0, 2]
            rx, ry, rz = cross(sx, sy, sz, ux, uy, uz)

            beta = dot(sx, sy, sz, nx, ny, nz) / a
            gamma = rz / a
            d = dot(vx, vy, vz, rx, ry, rz) / a
            alpha = 1.0 - (beta + gamma)

            # Positive-form tests so a NaN anywhere rejects the pixel
            if (alpha >= -barycentric_epsilon and beta >= -barycentric_epsilon
                    and gamma >= -barycentric_epsilon and d > min_distance):
                i = x + y * width
                for c in range(3):
                    buffer[i, c] = (colors[0, c] * alpha
                                    + colors[1, c] * beta
                                    + colors[2, c] * gamma)
                out_mask[i] = True
