# API Route Constants

# Base API
API_BASE = '/api'

# Showtime routes
SHOWTIME_BASE = f'{API_BASE}/showtimes'
SHOWTIME_LIST_BY_MOVIE = f'{SHOWTIME_BASE}/movie/{{movie_id}}'
SHOWTIME_SEATS = f'{SHOWTIME_BASE}/{{showtime_id}}/seats'

# Booking routes
BOOKING_BASE = f'{API_BASE}/bookings'
BOOKING_CREATE = BOOKING_BASE
BOOKING_HISTORY = f'{BOOKING_BASE}/user/history'
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_PAYMENT_INITIATE = f'{BOOKING_BASE}/{{booking_id}}/payment/khalti/initiate'
BOOKING_PAYMENT_VERIFY = f'{BOOKING_BASE}/{{booking_id}}/payment/khalti/verify'

# Admin booking routes
ADMIN_BOOKING_BASE = f'{API_BASE}/admin/bookings'
ADMIN_BOOKING_LIST = ADMIN_BOOKING_BASE
ADMIN_BOOKING_CANCEL = f'{ADMIN_BOOKING_BASE}/{{booking_id}}'
ADMIN_BOOKING_REMOVE = f'{ADMIN_BOOKING_BASE}/{{booking_id}}/remove'
