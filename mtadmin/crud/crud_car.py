"""
Resource client for cars
"""

from mtadmin.crud.base import CRUDBase
from mtadmin.schemas.car import Car, CarCreate, CarUpdate

CAR_FIELDS = """
    id schoolId carId carAdminId
    carAdmin { id name manufacturer category status }
    carName model registrationNumber year color fuelType transmission
    seatingCapacity currentMileage assignedDriverId
    assignedDriver { id driverId name email mobile status }
    totalBookings status lastServiceDate nextServiceDate createdAt updatedAt
"""

CAR_DETAIL_FIELDS = CAR_FIELDS + """
    engineNumber chassisNumber purchaseDate purchaseCost
    insuranceNumber insuranceExpiry pucExpiry fitnessExpiry
"""


class CRUDCar(CRUDBase[Car, CarCreate, CarUpdate]):
    pass


car = CRUDCar(
    Car,
    entity="Car",
    where_input="SearchCarInput",
    fields=CAR_FIELDS,
    detail_fields=CAR_DETAIL_FIELDS,
)
