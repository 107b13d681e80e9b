"""
core/messages.py -- Message catalogs, one dictionary per locale and namespace.

Namespaces:
  API      -- error and confirmation messages of the JSON handlers
  Schemas  -- field-level validation messages (companies/schemas.py)
  Web      -- labels and titles of the server-rendered pages

The default locale ("en") must define every id; other locales may lag
behind and fall back to it (see core/i18n.Translator).
"""

CATALOGS: dict[str, dict[str, dict[str, str]]] = {
    "en": {
        "API": {
            "pageAndlimitAreRequired": "Query parameters page and limit are required and must be positive integers (limit at most 1000).",
            "notAuthorized": "You are not authorized.",
            "userIsNotAMember": "You are not a member of this company.",
            "invalidCompanyId": "Company not found.",
            "recordNotFound": "Record not found.",
            "invalidRequest": "Invalid request.",
            "serverError": "Server error. Please try again later.",
            "tooManyRequests": "Too many requests. Please slow down.",
            "companyAlreadyExists": "A company with this id already exists.",
            "companyDeleted": "Company deleted.",
            "stockDeleted": "Stock deleted.",
            "priceTypeDeleted": "Price type deleted.",
            "memberDeleted": "Member removed.",
            "cannotRemoveOwner": "The company owner cannot be removed.",
            "roleDeleted": "Role deleted.",
            "roleInUse": "This role is still assigned to members.",
            "cannotDeleteDefaultRole": "The default role cannot be deleted.",
            "unknownRole": "The role does not belong to this company.",
            "unknownAvailableData": "Stocks and price types must belong to this company.",
            "invitationDeleted": "Invitation deleted.",
            "invitationDeclined": "Invitation declined.",
            "invitationAlreadyExists": "This email address has already been invited.",
            "alreadyMember": "You are already a member of this company.",
            "invalidCredentials": "Invalid email or password.",
            "loggedOut": "Logged out.",
            "registrationDisabled": "Self-registration is disabled.",
            "userAlreadyExists": "An account with this email already exists.",
        },
        "Schemas": {
            "invalidValue": "Invalid value.",
            "invalidId": "Id is required.",
            "invalidIdFormat": "Id may contain only Latin letters, digits, hyphens and underscores (up to 64 characters).",
            "invalidName": "Name is required.",
            "invalidTin": "TIN must be exactly 10 characters long.",
            "numericTin": "TIN must contain digits only.",
            "invalidDescription": "Description must be at least 50 characters long.",
            "invalidCurrency": "Currency is required.",
            "invalidRoleId": "Role is required.",
            "invalidEmail": "Enter a valid email address.",
            "invalidStockId": "Stock is required.",
            "invalidPriceTypeId": "Price type is required.",
            "invalidAvailableData": "Available data must be a list.",
            "invalidPassword": "Password must be at least 8 characters long.",
        },
        "Web": {
            "appName": "CompanyHub",
            "language": "Language",
            "navCompanies": "Companies",
            "navInvitations": "Invitations",
            "login": "Log in",
            "logout": "Log out",
            "register": "Sign up",
            "loginTitle": "Log in to CompanyHub",
            "registerTitle": "Create an account",
            "noAccount": "No account yet?",
            "email": "Email",
            "password": "Password",
            "displayName": "Display name",
            "save": "Save",
            "create": "Create",
            "edit": "Edit",
            "delete": "Delete",
            "cancel": "Cancel",
            "confirmDelete": "Are you sure? This cannot be undone.",
            "previous": "Previous",
            "next": "Next",
            "pageOf": "Page {page} of {totalPages}",
            "empty": "Nothing here yet.",
            "id": "Id",
            "notFoundTitle": "Not found",
            "notFoundText": "The page you are looking for does not exist or you do not have access to it.",
            "backHome": "Back to companies",
            "requestFailed": "The request could not be completed.",
            "companiesTitle": "Your companies",
            "companiesSubtitle": "Companies you own or belong to.",
            "newCompany": "New company",
            "editCompany": "Edit company",
            "deleteCompany": "Delete company",
            "companyId": "Company id",
            "companyName": "Name",
            "tin": "TIN",
            "description": "Description",
            "descriptionRu": "Description (Russian)",
            "slogan": "Slogan",
            "sloganRu": "Slogan (Russian)",
            "imageId": "Image id",
            "yourRole": "Your role",
            "tabInfo": "Info",
            "tabStocks": "Stocks",
            "tabPriceTypes": "Price types",
            "tabMembers": "Members",
            "tabRoles": "Roles",
            "tabInvitations": "Invitations",
            "stocksTitle": "Stocks",
            "stocksSubtitle": "Warehouses and points of sale of the company.",
            "stockName": "Stock name",
            "newStock": "Add stock",
            "priceTypesTitle": "Price types",
            "priceTypesSubtitle": "Price lists available in the company.",
            "priceTypeName": "Price type name",
            "currency": "Currency",
            "newPriceType": "Add price type",
            "membersTitle": "Members",
            "membersSubtitle": "People who have access to the company.",
            "member": "Member",
            "role": "Role",
            "changeRole": "Change role",
            "removeMember": "Remove",
            "owner": "Owner",
            "rolesTitle": "Roles",
            "rolesSubtitle": "Roles decide which stocks and price types members can see.",
            "newRole": "New role",
            "newRoleTitle": "New role for {companyName}",
            "newRoleSubtitle": "Pick the price types this role may see in each stock.",
            "editRoleTitle": "Edit role {roleName}",
            "roleName": "Role name",
            "defaultRole": "Default role: sees all data",
            "availableData": "Available data",
            "stock": "Stock",
            "priceTypes": "Price types",
            "invitationsTitle": "Invitations",
            "invitationsSubtitle": "Pending invitations to join the company.",
            "inviteEmail": "Email to invite",
            "invite": "Invite",
            "myInvitationsTitle": "My invitations",
            "myInvitationsSubtitle": "Companies that invited you.",
            "company": "Company",
            "accept": "Accept",
            "decline": "Decline",
        },
    },
    "ru": {
        "API": {
            "pageAndlimitAreRequired": "Параметры page и limit обязательны и должны быть положительными целыми числами (limit не больше 1000).",
            "notAuthorized": "Вы не авторизованы.",
            "userIsNotAMember": "Вы не являетесь сотрудником этой компании.",
            "invalidCompanyId": "Компания не найдена.",
            "recordNotFound": "Запись не найдена.",
            "invalidRequest": "Некорректный запрос.",
            "serverError": "Ошибка сервера. Попробуйте позже.",
            "tooManyRequests": "Слишком много запросов. Попробуйте позже.",
            "companyAlreadyExists": "Компания с таким идентификатором уже существует.",
            "companyDeleted": "Компания удалена.",
            "stockDeleted": "Склад удален.",
            "priceTypeDeleted": "Тип цены удален.",
            "memberDeleted": "Сотрудник удален.",
            "cannotRemoveOwner": "Нельзя удалить владельца компании.",
            "roleDeleted": "Роль удалена.",
            "roleInUse": "Эта роль назначена сотрудникам.",
            "cannotDeleteDefaultRole": "Роль по умолчанию нельзя удалить.",
            "unknownRole": "Роль не принадлежит этой компании.",
            "unknownAvailableData": "Склады и типы цен должны принадлежать этой компании.",
            "invitationDeleted": "Приглашение удалено.",
            "invitationDeclined": "Приглашение отклонено.",
            "invitationAlreadyExists": "Этот адрес уже приглашен.",
            "alreadyMember": "Вы уже являетесь сотрудником этой компании.",
            "invalidCredentials": "Неверный email или пароль.",
            "loggedOut": "Вы вышли из системы.",
            "registrationDisabled": "Регистрация отключена.",
            "userAlreadyExists": "Пользователь с таким email уже существует.",
        },
        "Schemas": {
            "invalidValue": "Некорректное значение.",
            "invalidId": "Укажите идентификатор.",
            "invalidIdFormat": "Идентификатор может содержать только латинские буквы, цифры, дефис и подчёркивание (до 64 символов).",
            "invalidName": "Укажите название.",
            "invalidTin": "ИНН должен состоять ровно из 10 символов.",
            "numericTin": "ИНН должен содержать только цифры.",
            "invalidDescription": "Описание должно содержать не менее 50 символов.",
            "invalidCurrency": "Укажите валюту.",
            "invalidRoleId": "Укажите роль.",
            "invalidEmail": "Введите корректный email.",
            "invalidStockId": "Укажите склад.",
            "invalidPriceTypeId": "Укажите тип цены.",
            "invalidAvailableData": "Доступные данные должны быть списком.",
            "invalidPassword": "Пароль должен содержать не менее 8 символов.",
        },
        "Web": {
            "language": "Язык",
            "navCompanies": "Компании",
            "navInvitations": "Приглашения",
            "login": "Войти",
            "logout": "Выйти",
            "register": "Регистрация",
            "loginTitle": "Вход в CompanyHub",
            "registerTitle": "Создание аккаунта",
            "noAccount": "Нет аккаунта?",
            "email": "Email",
            "password": "Пароль",
            "displayName": "Имя",
            "save": "Сохранить",
            "create": "Создать",
            "edit": "Изменить",
            "delete": "Удалить",
            "cancel": "Отмена",
            "confirmDelete": "Вы уверены? Это действие нельзя отменить.",
            "previous": "Назад",
            "next": "Вперед",
            "pageOf": "Страница {page} из {totalPages}",
            "empty": "Здесь пока пусто.",
            "id": "Идентификатор",
            "notFoundTitle": "Не найдено",
            "notFoundText": "Страница не существует или у вас нет к ней доступа.",
            "backHome": "К списку компаний",
            "requestFailed": "Не удалось выполнить запрос.",
            "companiesTitle": "Ваши компании",
            "companiesSubtitle": "Компании, которыми вы владеете или в которых работаете.",
            "newCompany": "Новая компания",
            "editCompany": "Изменить компанию",
            "deleteCompany": "Удалить компанию",
            "companyId": "Идентификатор компании",
            "companyName": "Название",
            "tin": "ИНН",
            "description": "Описание",
            "descriptionRu": "Описание (русский)",
            "slogan": "Слоган",
            "sloganRu": "Слоган (русский)",
            "imageId": "Идентификатор изображения",
            "yourRole": "Ваша роль",
            "tabInfo": "Информация",
            "tabStocks": "Склады",
            "tabPriceTypes": "Типы цен",
            "tabMembers": "Сотрудники",
            "tabRoles": "Роли",
            "tabInvitations": "Приглашения",
            "stocksTitle": "Склады",
            "stocksSubtitle": "Склады и точки продаж компании.",
            "stockName": "Название склада",
            "newStock": "Добавить склад",
            "priceTypesTitle": "Типы цен",
            "priceTypesSubtitle": "Прайс-листы компании.",
            "priceTypeName": "Название типа цены",
            "currency": "Валюта",
            "newPriceType": "Добавить тип цены",
            "membersTitle": "Сотрудники",
            "membersSubtitle": "Люди, у которых есть доступ к компании.",
            "member": "Сотрудник",
            "role": "Роль",
            "changeRole": "Сменить роль",
            "removeMember": "Удалить",
            "owner": "Владелец",
            "rolesTitle": "Роли",
            "rolesSubtitle": "Роли определяют, какие склады и типы цен видят сотрудники.",
            "newRole": "Новая роль",
            "newRoleTitle": "Новая роль для {companyName}",
            "newRoleSubtitle": "Выберите типы цен, доступные роли на каждом складе.",
            "editRoleTitle": "Изменение роли {roleName}",
            "roleName": "Название роли",
            "defaultRole": "Роль по умолчанию: видит все данные",
            "availableData": "Доступные данные",
            "stock": "Склад",
            "priceTypes": "Типы цен",
            "invitationsTitle": "Приглашения",
            "invitationsSubtitle": "Ожидающие приглашения в компанию.",
            "inviteEmail": "Email для приглашения",
            "invite": "Пригласить",
            "myInvitationsTitle": "Мои приглашения",
            "myInvitationsSubtitle": "Компании, которые вас пригласили.",
            "company": "Компания",
            "accept": "Принять",
            "decline": "Отклонить",
        },
    },
}
